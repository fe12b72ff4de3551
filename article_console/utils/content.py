"""Rendering helpers for backend-supplied article text.

Article bodies arrive as HTML written in the admin editor. They are
cleaned with nh3 before being handed to Streamlit as markup; titles and
names are plain text and get escaped for whichever renderer shows them.
"""

import html
import re
from typing import Optional

import nh3

# Markdown and Streamlit directive characters (links, images, emphasis,
# :color[...] and :emoji: shortcodes, $math$)
_MARKDOWN_SPECIAL = re.compile(r'([\\`*_{}\[\]()#+\-.!|<>~$:])')


def sanitize_html(value: Optional[str]) -> str:
    """Clean article HTML, keeping formatting and dropping scripts.

    Example:
        >>> sanitize_html("<p>Hi <strong>there</strong><script>x()</script></p>")
        '<p>Hi <strong>there</strong></p>'
    """
    if not value:
        return ""
    return nh3.clean(str(value))


def html_to_text(value: Optional[str]) -> str:
    """Plain text of an HTML fragment, for previews."""
    if not value:
        return ""
    stripped = nh3.clean(str(value), tags=set())
    return " ".join(html.unescape(stripped).split())


def escape_markdown(value: Optional[str]) -> str:
    """Backslash-escape text so st.markdown shows it literally."""
    if value is None:
        return ""
    return _MARKDOWN_SPECIAL.sub(r'\\\1', str(value))
