"""Admin category management table."""

import logging
from typing import Any, Dict, List

import pandas as pd
import requests
import streamlit as st

from article_console.config.settings import config
from article_console.router import Route
from article_console.services import get_api_client, get_listing_controller, ListingState
from article_console.utils import (
    SessionState,
    SessionCredential,
    ApiError,
    VIEW_ADMIN_CATEGORIES,
    PATH_ADMIN_CATEGORIES,
    format_date,
    row_number,
    page_after_delete,
    escape_markdown,
)
from article_console.ui.components import (
    go_to,
    require_role,
    show_error,
    show_toast,
    handle_write_error,
    render_pagination,
    refresh_category_options,
    render_search_box,
)

logger = logging.getLogger(__name__)

_CONFIRM_KEY = "confirm_delete_category"


def build_category_table(items: List[Dict[str, Any]], page: int, limit: int) -> pd.DataFrame:
    """Rows for the category table, numbered across pages."""
    rows = [
        {
            "No": row_number(page, limit, i),
            "Name": item.get('name', ""),
            "Created At": format_date(item.get('createdAt')),
        }
        for i, item in enumerate(items)
    ]
    return pd.DataFrame(rows, columns=["No", "Name", "Created At"])


def render_admin_categories_page(route: Route, credential: SessionCredential) -> None:
    """Render the admin category list."""
    if not require_role(credential):
        return

    success = route.query_value('success')
    if success:
        show_toast('success', success)
        SessionState.navigate(PATH_ADMIN_CATEGORIES)

    col1, col2 = st.columns([3, 1])
    with col1:
        st.title("Manage Categories")
    with col2:
        if st.button("+ Add Category", type="primary", width='stretch', key="admin_add_category"):
            go_to(f"{PATH_ADMIN_CATEGORIES}/create", delay=config.NAVIGATION_DELAY_SECONDS)

    render_search_box(VIEW_ADMIN_CATEGORIES, placeholder="Search categories...")

    st.divider()

    render_category_table()


def render_category_table() -> None:
    """Fetch and render the current page of categories."""
    filters = SessionState.get_filters(VIEW_ADMIN_CATEGORIES)
    page = filters['page']
    query = (page, filters['search'])

    client = get_api_client()
    controller = get_listing_controller(VIEW_ADMIN_CATEGORIES)

    with st.spinner("Loading categories..."):
        state = controller.load(
            query,
            lambda token: client.list_categories(
                page=page,
                limit=config.PAGE_SIZE,
                search=filters['search'],
                cancel_token=token,
            ),
        )

    if state is ListingState.FAILED:
        show_error(controller.error, prefix="Failed to load categories")
        if st.button("Try again", key="admin_categories_retry"):
            controller.invalidate()
            st.rerun()
        return

    if state is not ListingState.SUCCESS:
        return

    result = controller.result
    st.caption(f"Total categories: {result.total}")

    if not result.items:
        st.info("No categories found.")
        return

    st.dataframe(
        build_category_table(result.items, page, config.PAGE_SIZE),
        width='stretch',
        hide_index=True,
    )

    _render_row_actions(result.items, page)

    render_pagination(VIEW_ADMIN_CATEGORIES, page, result.total_pages)


def _render_row_actions(items: List[Dict[str, Any]], page: int) -> None:
    by_id = {str(item.get('id')): item for item in items}

    col_select, col_edit, col_delete = st.columns([3, 1, 1])
    with col_select:
        selected_id = st.selectbox(
            "Category",
            list(by_id),
            format_func=lambda cid: by_id[cid].get('name', cid),
            key="admin_category_select",
            label_visibility="collapsed",
        )
    selected = by_id.get(selected_id)
    if selected is None:
        return

    with col_edit:
        if st.button("Edit", key="admin_category_edit", width='stretch'):
            SessionState.set('edit_category', {'id': selected_id, 'name': selected.get('name', "")})
            go_to(f"{PATH_ADMIN_CATEGORIES}/{selected_id}/edit")
    with col_delete:
        if st.button("Delete", key="admin_category_delete", width='stretch'):
            SessionState.set(_CONFIRM_KEY, selected_id)
            st.rerun()

    if SessionState.get(_CONFIRM_KEY) == selected_id:
        st.warning(f"Delete category \"{escape_markdown(selected.get('name', ''))}\"? This cannot be undone.")
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Yes, delete", key="admin_category_confirm", type="primary"):
                _delete_category(selected_id, page, len(items))
        with col2:
            if st.button("Cancel", key="admin_category_cancel"):
                SessionState.clear(_CONFIRM_KEY)
                st.rerun()


def _delete_category(category_id: str, page: int, items_on_page: int) -> None:
    SessionState.clear(_CONFIRM_KEY)
    try:
        get_api_client().delete_category(category_id)
    except (ApiError, requests.exceptions.RequestException) as e:
        handle_write_error(e, "delete category")
        return

    SessionState.flash('success', "Category deleted")
    refresh_category_options()

    next_page = page_after_delete(page, items_on_page)
    if not SessionState.set_filter(VIEW_ADMIN_CATEGORIES, 'page', next_page):
        get_listing_controller(VIEW_ADMIN_CATEGORIES).invalidate()
    st.rerun()
