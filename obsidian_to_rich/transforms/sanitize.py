"""Clean HTML for rich-text paste targets.

The rule table is fixed. Anything it does not name is passed through
unchanged, so unfamiliar markup is kept rather than lost.
"""

import re

from bs4 import BeautifulSoup

# Elements removed together with their content
DROP_ELEMENTS = frozenset({
    'script', 'style', 'iframe', 'frame', 'frameset', 'object', 'embed',
    'applet', 'form', 'button', 'select', 'textarea', 'noscript', 'link',
    'meta', 'base', 'template',
})

DROP_ATTRIBUTES = frozenset({'contenteditable', 'tabindex', 'autofocus', 'draggable'})

URL_ATTRIBUTES = ('href', 'src')

UNSAFE_URL_PATTERN = re.compile(r'^\s*(?:javascript|vbscript):', re.IGNORECASE)

CHECKED_BOX = '☑'
UNCHECKED_BOX = '☐'


def _is_dropped_attribute(name: str) -> bool:
    name = name.lower()
    return name.startswith('on') or name in DROP_ATTRIBUTES


def sanitize(html: str) -> str:
    """Remove or rewrite markup that paste targets reject.

    - script, style, embedded objects and form controls are removed
    - task list checkboxes become ☑ / ☐ characters
    - event handlers and editing attributes are removed
    - javascript: and vbscript: URLs are removed

    Args:
        html: HTML fragment or document

    Returns:
        Sanitized HTML
    """
    soup = BeautifulSoup(html, 'html.parser')

    for element in soup.find_all(sorted(DROP_ELEMENTS)):
        # Nested matches go away with their ancestor
        if not element.decomposed:
            element.decompose()

    for element in soup.find_all('input'):
        if str(element.get('type', '')).lower() == 'checkbox':
            mark = CHECKED_BOX if element.has_attr('checked') else UNCHECKED_BOX
            element.replace_with(mark)
        else:
            element.decompose()

    for element in soup.find_all(True):
        for name in list(element.attrs):
            if _is_dropped_attribute(name):
                del element[name]
            elif name.lower() in URL_ATTRIBUTES and UNSAFE_URL_PATTERN.match(str(element[name])):
                del element[name]

    return soup.decode(formatter='html')
