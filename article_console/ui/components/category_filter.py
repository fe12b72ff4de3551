"""Category options shared by the article filters and the article form."""

import logging
from typing import Dict, List, Optional

import streamlit as st

from article_console.services import get_api_client, get_listing_controller, fetch_with_retry, ListingState
from article_console.utils import SessionState
from article_console.ui.components.notifications import show_error

logger = logging.getLogger(__name__)

CATEGORY_OPTIONS_VIEW = "category_options"
ALL_CATEGORIES_LABEL = "All categories"


def load_category_options(force: bool = False) -> Optional[List[Dict]]:
    """Fetch every category once per session, retrying transient failures.

    Returns:
        The category list, or None if loading failed (already reported)
    """
    client = get_api_client()
    controller = get_listing_controller(CATEGORY_OPTIONS_VIEW)
    state = controller.load(
        None,
        lambda token: fetch_with_retry(client.get_all_categories),
        force=force,
    )
    if state is ListingState.FAILED:
        show_error(controller.error, prefix="Failed to load categories")
        return None
    return controller.result or []


def refresh_category_options() -> None:
    """Make the next load_category_options() refetch."""
    get_listing_controller(CATEGORY_OPTIONS_VIEW).invalidate()


def render_category_filter(view: str, categories: List[Dict], disabled: bool = False) -> None:
    """Category dropdown bound to a listing view's 'category' filter."""
    ids = [""] + [str(c.get('id')) for c in categories]
    names = {str(c.get('id')): c.get('name', '') for c in categories}
    current = SessionState.get_filters(view).get('category', "")
    index = ids.index(current) if current in ids else 0

    selected = st.selectbox(
        "Category",
        ids,
        index=index,
        format_func=lambda cid: names.get(cid, ALL_CATEGORIES_LABEL) if cid else ALL_CATEGORIES_LABEL,
        key=f"{view}_category_select",
        disabled=disabled,
        label_visibility="collapsed",
    )
    if SessionState.set_filter(view, 'category', selected):
        st.rerun()


def render_search_box(view: str, placeholder: str, disabled: bool = False) -> None:
    """Search input bound to a listing view's 'search' filter.

    Streamlit commits text on enter or blur, so each commit is one query.
    """
    current = SessionState.get_filters(view).get('search', "")
    query = st.text_input(
        "Search",
        value=current,
        placeholder=placeholder,
        key=f"{view}_search_input",
        disabled=disabled,
        label_visibility="collapsed",
    )
    if SessionState.set_filter(view, 'search', query.strip()):
        st.rerun()
