"""Article Console Streamlit Application.

Public article reader plus the admin area, routed by a path string kept
in session state.
"""

import logging
from pathlib import Path

# Load environment variables from .env file BEFORE any other imports
# so the frozen config picks up API_BASE_URL and friends
from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / ".env")

import streamlit as st

from article_console import router
from article_console.config.settings import config
from article_console.utils import SessionState, PATH_HOME
from article_console.ui.components import (
    render_admin_sidebar,
    render_public_sidebar,
    render_flash,
)
from article_console.ui.pages import (
    render_articles_page,
    render_article_detail_page,
    render_login_page,
    render_register_page,
    render_admin_articles_page,
    render_admin_article_form_page,
    render_admin_categories_page,
    render_admin_category_form_page,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Main application entry point."""
    # Page configuration - must be first Streamlit command
    st.set_page_config(
        page_title=config.APP_NAME,
        page_icon=config.APP_ICON,
        layout="wide",
        initial_sidebar_state="expanded",
    )

    _apply_custom_css()

    SessionState.init_defaults()
    _apply_deep_link()

    credential = SessionState.load_credential()
    path = SessionState.get_current_path()

    route, redirect = router.resolve(path, credential)
    if redirect is not None:
        SessionState.navigate(redirect)
        st.rerun()

    if route.name.startswith("admin_"):
        render_admin_sidebar(credential)
    else:
        render_public_sidebar(credential)

    render_flash()

    if route.name == router.ROUTE_ARTICLES:
        render_articles_page(route)

    elif route.name == router.ROUTE_ARTICLE_DETAIL:
        render_article_detail_page(route)

    elif route.name == router.ROUTE_LOGIN:
        render_login_page(route)

    elif route.name == router.ROUTE_REGISTER:
        render_register_page(route)

    elif route.name == router.ROUTE_ADMIN_ARTICLES:
        render_admin_articles_page(route, credential)

    elif route.name in (router.ROUTE_ADMIN_ARTICLE_CREATE, router.ROUTE_ADMIN_ARTICLE_EDIT):
        render_admin_article_form_page(route, credential)

    elif route.name == router.ROUTE_ADMIN_CATEGORIES:
        render_admin_categories_page(route, credential)

    elif route.name in (router.ROUTE_ADMIN_CATEGORY_CREATE, router.ROUTE_ADMIN_CATEGORY_EDIT):
        render_admin_category_form_page(route, credential)

    else:
        # Fallback to the public list
        SessionState.navigate(PATH_HOME)
        render_articles_page(router.match_route(PATH_HOME))


def _apply_deep_link():
    """Start at ?path=... on the first run of a browser session."""
    if SessionState.get('deep_link_applied'):
        return
    SessionState.set('deep_link_applied', True)

    path = st.query_params.get("path")
    if path:
        logger.info(f"Opening deep link {path}")
        del st.query_params["path"]
        SessionState.navigate(path if path.startswith("/") else f"/{path}")


def _apply_custom_css():
    """Apply custom CSS styling."""
    st.markdown("""
        <style>
        /* Article card images */
        div[data-testid="stImage"] img {
            border-radius: 8px;
        }

        /* Better sidebar styling */
        section[data-testid="stSidebar"] > div {
            padding-top: 1rem;
        }

        /* Improve button consistency */
        .stButton > button {
            font-size: 0.875rem;
        }

        /* Hide Streamlit footer only (keep menu for theme settings) */
        footer {visibility: hidden;}
        </style>
    """, unsafe_allow_html=True)


if __name__ == "__main__":
    main()
