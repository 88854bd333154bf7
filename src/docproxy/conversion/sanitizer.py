"""Pattern-based removal of styles and scripts from HTML.

This is a best-effort textual strip, not an HTML parser. It is not a
security boundary and will miss unquoted attributes or malformed tags.
"""

import re

STYLE_BLOCK = re.compile(r"<style[^>]*>[\s\S]*?</style>", re.IGNORECASE)
SCRIPT_BLOCK = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)
STYLE_ATTRIBUTE = re.compile(r"""\s+style\s*=\s*(?:"[^"]*"|'[^']*')""", re.IGNORECASE)
EVENT_ATTRIBUTE = re.compile(r"""\s+on\w+\s*=\s*(?:"[^"]*"|'[^']*')""", re.IGNORECASE)


def sanitize_markup(html: str) -> str:
    """
    Strip <style> and <script> blocks, inline style attributes and
    on* event-handler attributes.

    Example:
        >>> sanitize_markup('<p style="color:red" onclick="go()">Hi</p>')
        '<p>Hi</p>'
    """
    cleaned = STYLE_BLOCK.sub("", html)
    cleaned = SCRIPT_BLOCK.sub("", cleaned)
    cleaned = STYLE_ATTRIBUTE.sub("", cleaned)
    return EVENT_ATTRIBUTE.sub("", cleaned)
