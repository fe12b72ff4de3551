"""Public article list.

Data flow:
- Filters (page, category, search) live in session state per view
- The view's ListingController cancels a superseded query and only
  applies the newest result
"""

import logging

import streamlit as st

from article_console.config.settings import config
from article_console.router import Route
from article_console.services import get_api_client, get_listing_controller, ListingState
from article_console.utils import SessionState, VIEW_ARTICLES, PATH_HOME
from article_console.ui.components import (
    go_to,
    show_error,
    render_article_grid,
    render_pagination,
    load_category_options,
    render_category_filter,
    render_search_box,
)

logger = logging.getLogger(__name__)


def render_articles_page(route: Route) -> None:
    """Render the public article list."""
    # ?success=login has already been shown as a flash; drop it from the path
    if route.query_value('success'):
        SessionState.navigate(PATH_HOME)

    st.title("Articles")
    st.caption("News, stories and updates")

    render_filter_section()

    st.divider()

    render_article_list()


def render_filter_section() -> None:
    """Render the category filter and search box."""
    categories = load_category_options() or []
    col1, col2 = st.columns([1, 2])
    with col1:
        render_category_filter(VIEW_ARTICLES, categories)
    with col2:
        render_search_box(VIEW_ARTICLES, placeholder="Search articles...")


def render_article_list() -> None:
    """Fetch the current page and render it."""
    filters = SessionState.get_filters(VIEW_ARTICLES)
    page = filters['page']
    query = (page, filters['category'], filters['search'])

    client = get_api_client()
    controller = get_listing_controller(VIEW_ARTICLES)

    with st.spinner("Loading articles..."):
        state = controller.load(
            query,
            lambda token: client.list_articles(
                page=page,
                limit=config.PAGE_SIZE,
                category=filters['category'],
                search=filters['search'],
                cancel_token=token,
            ),
        )

    if state is ListingState.FAILED:
        show_error(controller.error, prefix="Failed to load articles")
        if st.button("Try again", key="articles_retry"):
            controller.invalidate()
            st.rerun()
        return

    if state is not ListingState.SUCCESS:
        return

    result = controller.result
    st.caption(f"Showing {len(result.items)} of {result.total} article(s)")

    if not result.items:
        st.info("No articles found.")
        if st.button("Reset search", key="articles_reset"):
            _reset_filters()
            st.rerun()
        return

    clicked = render_article_grid(result.items, columns=3, key_prefix="public_")
    if clicked:
        go_to(f"/articles/{clicked.get('id')}")

    render_pagination(VIEW_ARTICLES, page, result.total_pages)


def _reset_filters() -> None:
    SessionState.reset_filters(VIEW_ARTICLES)
    SessionState.clear(f"{VIEW_ARTICLES}_search_input")
    SessionState.clear(f"{VIEW_ARTICLES}_category_select")
