"""Admin article create/edit form.

The image is uploaded as soon as a file is picked; the form then only
carries the returned URL. Fields are keyed widgets rather than an
st.form so the preview below follows every committed edit. Saving
validates title, content and category before any write.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
import streamlit as st

from article_console.config.settings import config
from article_console.router import Route
from article_console.services import get_api_client, get_listing_controller, ListingState
from article_console.utils import (
    SessionState,
    SessionCredential,
    ApiError,
    UploadError,
    FormValidator,
    ImageFileValidator,
    VIEW_ARTICLES,
    VIEW_ADMIN_ARTICLES,
    PATH_ADMIN_ARTICLES,
)
from article_console.ui.components import (
    go_to,
    require_role,
    show_error,
    handle_write_error,
    render_field_errors,
    load_category_options,
    build_article_body_html,
)

logger = logging.getLogger(__name__)

ARTICLE_FORM_VIEW = "admin_article_form"

_LABELS = {
    'title': "Title",
    'content': "Content",
    'category_id': "Category",
    'image': "Image",
}

_FIELDS = ('title', 'category_id', 'content')


def _image_key(article_id: Optional[str]) -> str:
    return f"article_form_image_{article_id or 'new'}"


def _field_key(article_id: Optional[str], name: str) -> str:
    return f"article_form_{article_id or 'new'}_{name}"


def seed_form_fields(article_id: Optional[str], article: Dict[str, Any], category_ids: List[str]) -> None:
    """Put the loaded article into the form's widget state, once.

    Later reruns keep whatever the admin has typed since.
    """
    category_id = str(article.get('categoryId') or (article.get('category') or {}).get('id') or "")
    initial = {
        'title': article.get('title') or "",
        'category_id': category_id if category_id in category_ids else "",
        'content': article.get('content') or "",
    }
    for name in _FIELDS:
        key = _field_key(article_id, name)
        if not SessionState.has(key):
            SessionState.set(key, initial[name])

    if not SessionState.has(_image_key(article_id)):
        SessionState.set(_image_key(article_id), article.get('imageUrl') or "")


def clear_form_state(article_id: Optional[str]) -> None:
    """Forget the form's fields and image so the next visit starts fresh."""
    for name in _FIELDS:
        SessionState.clear(_field_key(article_id, name))
    SessionState.clear(_image_key(article_id))


def render_admin_article_form_page(route: Route, credential: SessionCredential) -> None:
    """Render the create form, or the edit form when the route has an id."""
    if not require_role(credential):
        return

    article_id = route.params.get('id')
    editing = article_id is not None

    if st.button("← Back to articles", key="article_form_back"):
        clear_form_state(article_id)
        go_to(PATH_ADMIN_ARTICLES)

    st.title("Edit Article" if editing else "Create Article")

    categories = load_category_options()
    if categories is None:
        return

    article: Dict[str, Any] = {}
    if editing:
        article = _load_article(article_id)
        if article is None:
            return

    seed_form_fields(article_id, article, [str(c.get('id')) for c in categories])

    render_image_section(article_id)
    render_article_form(article_id, categories)
    render_article_preview(article_id, categories)


def _load_article(article_id: str) -> Optional[Dict[str, Any]]:
    client = get_api_client()
    controller = get_listing_controller(ARTICLE_FORM_VIEW)

    with st.spinner("Loading article..."):
        state = controller.load(
            article_id,
            lambda token: client.get_article(article_id, cancel_token=token),
        )

    if state is ListingState.FAILED:
        show_error(controller.error, prefix="Failed to load article")
        if st.button("Try again", key="article_form_retry"):
            controller.invalidate()
            st.rerun()
        return None
    if state is not ListingState.SUCCESS:
        return None
    return controller.result


def render_image_section(article_id: Optional[str]) -> None:
    """Thumbnail uploader with preview and remove."""
    key = _image_key(article_id)
    image_url = SessionState.get(key, "")

    st.subheader("Thumbnail")
    uploaded = st.file_uploader(
        "Upload image",
        type=[ext.lstrip('.') for ext in sorted(config.ALLOWED_IMAGE_EXTENSIONS)],
        key=f"{key}_uploader",
        help=f"Max {config.MAX_IMAGE_SIZE_MB}MB",
    )

    if uploaded is not None and SessionState.file_changed(uploaded, key=f"{key}_hash"):
        _upload_image(key, uploaded)
        image_url = SessionState.get(key, "")

    if image_url:
        st.image(image_url, width=240)
        if st.button("Remove image", key=f"{key}_remove"):
            SessionState.set(key, "")
            st.rerun()
    else:
        st.caption("No image selected")


def _upload_image(key: str, uploaded) -> None:
    validation = ImageFileValidator.validate(uploaded.name, uploaded.size)
    if not validation:
        render_field_errors(validation, _LABELS)
        return

    try:
        with st.spinner("Uploading image..."):
            url = get_api_client().upload_image(uploaded.name, uploaded.getvalue(), uploaded.type)
    except UploadError as e:
        logger.warning(f"Upload of {uploaded.name} returned no URL")
        show_error(e, prefix="Failed to upload image")
        return
    except (ApiError, requests.exceptions.RequestException) as e:
        handle_write_error(e, "upload image")
        return

    SessionState.set(key, url)


def render_article_form(article_id: Optional[str], categories: List[Dict]) -> None:
    """Title, category and content fields with the save button."""
    ids = [""] + [str(c.get('id')) for c in categories]
    names = {str(c.get('id')): c.get('name', '') for c in categories}

    st.text_input("Title", key=_field_key(article_id, 'title'), placeholder="Enter article title")
    st.selectbox(
        "Category",
        ids,
        key=_field_key(article_id, 'category_id'),
        format_func=lambda cid: names.get(cid, "") if cid else "Select category",
    )
    st.text_area(
        "Content",
        key=_field_key(article_id, 'content'),
        height=300,
        placeholder="Write the article... (HTML allowed)",
    )

    if st.button(
        "Save changes" if article_id else "Upload article",
        type="primary",
        width='stretch',
        key="article_form_submit",
    ):
        _handle_submit(
            article_id,
            (SessionState.get(_field_key(article_id, 'title')) or "").strip(),
            SessionState.get(_field_key(article_id, 'content')) or "",
            SessionState.get(_field_key(article_id, 'category_id')) or "",
        )


def render_article_preview(article_id: Optional[str], categories: List[Dict]) -> None:
    """Show the article as readers will see it."""
    names = {str(c.get('id')): c.get('name', '') for c in categories}

    st.divider()
    st.subheader("Preview")
    with st.container(border=True):
        st.markdown(
            build_article_body_html(
                title=SessionState.get(_field_key(article_id, 'title')),
                content=SessionState.get(_field_key(article_id, 'content')),
                category_name=names.get(SessionState.get(_field_key(article_id, 'category_id')) or ""),
                image_url=SessionState.get(_image_key(article_id)),
            ),
            unsafe_allow_html=True,
        )


def _handle_submit(article_id: Optional[str], title: str, content: str, category_id: str) -> None:
    validation = FormValidator.validate_article(title, content, category_id)
    if not validation:
        render_field_errors(validation, _LABELS)
        return

    image_url = SessionState.get(_image_key(article_id), "") or None
    client = get_api_client()
    try:
        with st.spinner("Saving article..."):
            if article_id:
                client.update_article(article_id, title, content, category_id, image_url)
            else:
                client.create_article(title, content, category_id, image_url)
    except (ApiError, requests.exceptions.RequestException) as e:
        handle_write_error(e, "update article" if article_id else "create article")
        return

    logger.info(f"Saved article {article_id or title}")
    SessionState.flash('success', "Article updated" if article_id else "Article created")
    clear_form_state(article_id)
    if article_id:
        get_listing_controller(ARTICLE_FORM_VIEW).invalidate()
    get_listing_controller(VIEW_ADMIN_ARTICLES).invalidate()
    get_listing_controller(VIEW_ARTICLES).invalidate()
    go_to(PATH_ADMIN_ARTICLES)
