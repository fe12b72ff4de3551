"""Article card component.

Displays an article in the public grid, plus the rendered article body
shared by the detail page and the admin form preview.
"""

import logging
from typing import Dict, Any, Optional

import streamlit as st

from article_console.utils import escape_text, format_date, truncate, sanitize_html, html_to_text

logger = logging.getLogger(__name__)

NO_CATEGORY_LABEL = "Uncategorized"


def build_article_card_html(article: Dict[str, Any], preview_length: int = 120) -> str:
    """Card body as HTML, with every interpolated value escaped."""
    title = escape_text(article.get('title') or "Untitled")
    category = escape_text((article.get('category') or {}).get('name') or NO_CATEGORY_LABEL)
    created = escape_text(format_date(article.get('createdAt')))
    preview = escape_text(truncate(html_to_text(article.get('content')), preview_length))

    return (
        f"<p style='color: #2563eb; font-size: 0.8rem; margin: 4px 0;'>{category}"
        f"<span style='color: #888;'> · {created}</span></p>"
        f"<h3 style='margin: 4px 0 8px 0; font-size: 1.15rem;'>{title}</h3>"
        f"<p style='color: #555; font-size: 0.9rem; margin: 0;'>{preview}</p>"
    )


def build_article_body_html(
    title: Optional[str],
    content: Optional[str],
    category_name: Optional[str] = None,
    image_url: Optional[str] = None
) -> str:
    """Full article as HTML: category, title, image and cleaned body.

    Title, category and image URL are escaped; the body is sanitized
    so its formatting survives.
    """
    parts = []
    if category_name:
        parts.append(f"<p style='color: #2563eb; font-size: 0.85rem; margin: 0;'>{escape_text(category_name)}</p>")
    parts.append(f"<h2 style='margin: 4px 0 12px 0;'>{escape_text(title or 'Untitled')}</h2>")
    if image_url:
        parts.append(
            f"<img src='{escape_text(image_url)}' alt='' "
            f"style='max-width: 100%; border-radius: 8px; margin-bottom: 12px;'>"
        )
    parts.append(f"<div>{sanitize_html(content)}</div>")
    return "".join(parts)


def render_article_content(content: Optional[str]) -> None:
    """Render a sanitized article body."""
    st.markdown(sanitize_html(content), unsafe_allow_html=True)


def render_article_card(article: Dict[str, Any], key_prefix: str = "") -> bool:
    """Render an article card.

    Args:
        article: Article dict from the backend
        key_prefix: Prefix for widget keys to ensure uniqueness

    Returns:
        bool: True if "Read more" was clicked
    """
    with st.container(border=True):
        if article.get('imageUrl'):
            st.image(article['imageUrl'])
        st.markdown(build_article_card_html(article), unsafe_allow_html=True)
        return st.button("Read more", key=f"{key_prefix}read_{article.get('id')}")


def render_article_grid(articles, columns: int = 3, key_prefix: str = "grid_") -> Optional[Dict[str, Any]]:
    """Render articles in a grid.

    Returns:
        The clicked article, or None
    """
    clicked = None
    for start in range(0, len(articles), columns):
        cols = st.columns(columns)
        for col, article in zip(cols, articles[start:start + columns]):
            with col:
                if render_article_card(article, key_prefix=key_prefix):
                    clicked = article
    return clicked
