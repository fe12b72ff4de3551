"""Admin category create/edit form."""

import logging
from typing import Optional
from urllib.parse import quote

import requests
import streamlit as st

from article_console.router import Route
from article_console.services import get_api_client, get_listing_controller
from article_console.utils import (
    SessionState,
    SessionCredential,
    ApiError,
    FormValidator,
    VIEW_ADMIN_CATEGORIES,
    PATH_ADMIN_CATEGORIES,
)
from article_console.ui.components import (
    go_to,
    require_role,
    handle_write_error,
    render_field_errors,
    refresh_category_options,
)

logger = logging.getLogger(__name__)


def render_admin_category_form_page(route: Route, credential: SessionCredential) -> None:
    """Render the create form, or the edit form for the selected category.

    Editing works from the category picked on the list page; opening an
    edit path without that selection returns to the list.
    """
    if not require_role(credential):
        return

    category_id = route.params.get('id')
    current_name = ""
    if category_id is not None:
        selected = SessionState.get('edit_category') or {}
        if str(selected.get('id')) != category_id:
            logger.info(f"No selection for category {category_id}, back to list")
            go_to(PATH_ADMIN_CATEGORIES)
            return
        current_name = selected.get('name', "")

    if st.button("← Back to categories", key="category_form_back"):
        SessionState.clear('edit_category')
        go_to(PATH_ADMIN_CATEGORIES)

    st.title("Edit Category" if category_id else "Add Category")

    with st.form(f"category_form_{category_id or 'new'}"):
        name = st.text_input("Name", value=current_name, placeholder="Enter category name")
        submitted = st.form_submit_button(
            "Save changes" if category_id else "Add category",
            type="primary",
            width='stretch',
        )

    if submitted:
        _handle_submit(category_id, name.strip())


def _handle_submit(category_id: Optional[str], name: str) -> None:
    validation = FormValidator.validate_category(name)
    if not validation:
        render_field_errors(validation, {'name': "Name"})
        return

    client = get_api_client()
    try:
        with st.spinner("Saving category..."):
            if category_id:
                client.update_category(category_id, name)
            else:
                client.create_category(name)
    except (ApiError, requests.exceptions.RequestException) as e:
        handle_write_error(e, "update category" if category_id else "create category")
        return

    message = "Category updated" if category_id else "Category created"
    logger.info(f"{message}: {name}")
    SessionState.clear('edit_category')
    refresh_category_options()
    get_listing_controller(VIEW_ADMIN_CATEGORIES).invalidate()
    go_to(f"{PATH_ADMIN_CATEGORIES}?success={quote(message)}")
