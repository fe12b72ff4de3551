"""Admin article management list.

Filters and pagination as on the public list, plus edit and delete.
Every admin call happens after the role gate passes.
"""

import logging
from typing import Any, Dict

import requests
import streamlit as st

from article_console.config.settings import config
from article_console.router import Route
from article_console.services import get_api_client, get_listing_controller, ListingState
from article_console.utils import (
    SessionState,
    SessionCredential,
    ApiError,
    VIEW_ARTICLES,
    VIEW_ADMIN_ARTICLES,
    PATH_ADMIN_ARTICLES,
    format_date,
    escape_markdown,
)
from article_console.ui.components import (
    go_to,
    require_role,
    show_error,
    handle_write_error,
    render_pagination,
    load_category_options,
    render_category_filter,
    render_search_box,
)

logger = logging.getLogger(__name__)

_CONFIRM_KEY = "confirm_delete_article"


def render_admin_articles_page(route: Route, credential: SessionCredential) -> None:
    """Render the admin article list."""
    if not require_role(credential):
        return

    if route.query_value('success'):
        SessionState.navigate(PATH_ADMIN_ARTICLES)

    col1, col2 = st.columns([3, 1])
    with col1:
        st.title("Manage Articles")
    with col2:
        if st.button("+ Add Article", type="primary", width='stretch', key="admin_add_article"):
            go_to(f"{PATH_ADMIN_ARTICLES}/create", delay=config.NAVIGATION_DELAY_SECONDS)

    categories = load_category_options() or []
    col1, col2 = st.columns([1, 2])
    with col1:
        render_category_filter(VIEW_ADMIN_ARTICLES, categories)
    with col2:
        render_search_box(VIEW_ADMIN_ARTICLES, placeholder="Search articles...")

    st.divider()

    render_admin_article_list()


def render_admin_article_list() -> None:
    """Fetch and render the current page of articles."""
    filters = SessionState.get_filters(VIEW_ADMIN_ARTICLES)
    page = filters['page']
    query = (page, filters['category'], filters['search'])

    client = get_api_client()
    controller = get_listing_controller(VIEW_ADMIN_ARTICLES)

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
        if st.button("Try again", key="admin_articles_retry"):
            controller.invalidate()
            st.rerun()
        return

    if state is not ListingState.SUCCESS:
        return

    result = controller.result
    st.caption(f"Total articles: {result.total}")

    if not result.items:
        st.info("No articles found.")
        if st.button("Reset search", key="admin_articles_reset"):
            SessionState.reset_filters(VIEW_ADMIN_ARTICLES)
            SessionState.clear(f"{VIEW_ADMIN_ARTICLES}_search_input")
            SessionState.clear(f"{VIEW_ADMIN_ARTICLES}_category_select")
            st.rerun()
        return

    for article in result.items:
        _render_article_row(article)

    render_pagination(VIEW_ADMIN_ARTICLES, page, result.total_pages)


def _render_article_row(article: Dict[str, Any]) -> None:
    article_id = str(article.get('id'))

    with st.container(border=True):
        col_img, col_body, col_actions = st.columns([1, 4, 1])

        with col_img:
            if article.get('imageUrl'):
                st.image(article['imageUrl'], width=96)

        with col_body:
            st.markdown(f"**{escape_markdown(article.get('title') or 'Untitled')}**")
            category = (article.get('category') or {}).get('name') or "Uncategorized"
            st.caption(escape_markdown(f"{category} · {format_date(article.get('createdAt'))}"))

        with col_actions:
            if st.button("Edit", key=f"edit_{article_id}", width='stretch'):
                go_to(f"{PATH_ADMIN_ARTICLES}/{article_id}", delay=config.NAVIGATION_DELAY_SECONDS)
            if st.button("Delete", key=f"delete_{article_id}", width='stretch'):
                SessionState.set(_CONFIRM_KEY, article_id)
                st.rerun()

        if SessionState.get(_CONFIRM_KEY) == article_id:
            st.warning("Are you sure you want to delete this article?")
            col1, col2 = st.columns(2)
            with col1:
                if st.button("Yes, delete", key=f"confirm_{article_id}", type="primary"):
                    _delete_article(article_id)
            with col2:
                if st.button("Cancel", key=f"cancel_{article_id}"):
                    SessionState.clear(_CONFIRM_KEY)
                    st.rerun()


def _delete_article(article_id: str) -> None:
    SessionState.clear(_CONFIRM_KEY)
    try:
        get_api_client().delete_article(article_id)
    except (ApiError, requests.exceptions.RequestException) as e:
        handle_write_error(e, "delete article")
        return

    SessionState.flash('success', "Article deleted")
    get_listing_controller(VIEW_ADMIN_ARTICLES).invalidate()
    get_listing_controller(VIEW_ARTICLES).invalidate()
    st.rerun()
