"""Article detail page.

Shows one article and up to three related articles from the same
category. The main fetch is retried; related articles are optional and
their failures are ignored.
"""

import logging
from typing import Any, Dict, List, Tuple

import requests
import streamlit as st

from article_console.router import Route
from article_console.services import (
    get_api_client,
    get_listing_controller,
    fetch_with_retry,
    ListingState,
    CancellationToken,
)
from article_console.utils import ApiError, escape_markdown, format_date, PATH_HOME
from article_console.ui.components import go_to, show_error, render_article_card, render_article_content

logger = logging.getLogger(__name__)


def fetch_article_bundle(
    client,
    article_id: str,
    token: CancellationToken = None
) -> Tuple[Dict[str, Any], List[dict]]:
    """Load an article and its related articles.

    Returns:
        (article, related)
    """
    article = fetch_with_retry(lambda: client.get_article(article_id, cancel_token=token))

    related: List[dict] = []
    category_id = (article.get('category') or {}).get('id')
    if category_id:
        try:
            related = client.get_related_articles(category_id, article_id)
        except (ApiError, requests.exceptions.RequestException) as e:
            logger.warning(f"Related articles for {article_id} unavailable: {e}")
    return article, related


def render_article_detail_page(route: Route) -> None:
    """Render one article."""
    article_id = route.params['id']
    client = get_api_client()
    controller = get_listing_controller("article_detail")

    if st.button("← Back to articles", key="detail_back"):
        go_to(PATH_HOME)

    with st.spinner("Loading article..."):
        state = controller.load(
            article_id,
            lambda token: fetch_article_bundle(client, article_id, token),
        )

    if state is ListingState.FAILED:
        show_error(controller.error, prefix="Failed to load article")
        if st.button("Try again", key="detail_retry"):
            controller.invalidate()
            st.rerun()
        return

    if state is not ListingState.SUCCESS:
        return

    article, related = controller.result
    _render_article(article)

    if related:
        st.divider()
        st.subheader("Other articles")
        cols = st.columns(len(related))
        for col, item in zip(cols, related):
            with col:
                if render_article_card(item, key_prefix="related_"):
                    go_to(f"/articles/{item.get('id')}")


def _render_article(article: Dict[str, Any]) -> None:
    category = (article.get('category') or {}).get('name')
    meta = " · ".join(p for p in (format_date(article.get('createdAt')), category) if p)
    if meta:
        st.caption(escape_markdown(meta))

    st.title(escape_markdown(article.get('title') or "Untitled"))

    if article.get('imageUrl'):
        st.image(article['imageUrl'])

    render_article_content(article.get('content'))
