"""Image handling for Obsidian to Rich."""
