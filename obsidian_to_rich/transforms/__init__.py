"""Text and HTML transforms applied around rendering."""
