"""Reusable UI components for the Article Console."""
from article_console.ui.components.notifications import (
    describe_error,
    show_error,
    show_toast,
    render_flash,
    render_field_errors,
)
from article_console.ui.components.navigation import (
    go_to,
    require_role,
    handle_write_error,
)
from article_console.ui.components.pagination import (
    render_pagination,
)
from article_console.ui.components.article_card import (
    build_article_card_html,
    build_article_body_html,
    render_article_content,
    render_article_card,
    render_article_grid,
)
from article_console.ui.components.category_filter import (
    load_category_options,
    refresh_category_options,
    render_category_filter,
    render_search_box,
)
from article_console.ui.components.sidebar import (
    render_admin_sidebar,
    render_public_sidebar,
    render_backend_status,
)

__all__ = [
    # Notifications
    "describe_error",
    "show_error",
    "show_toast",
    "render_flash",
    "render_field_errors",
    # Navigation
    "go_to",
    "require_role",
    "handle_write_error",
    # Pagination
    "render_pagination",
    # Article card
    "build_article_card_html",
    "build_article_body_html",
    "render_article_content",
    "render_article_card",
    "render_article_grid",
    # Category filter
    "load_category_options",
    "refresh_category_options",
    "render_category_filter",
    "render_search_box",
    # Sidebar
    "render_admin_sidebar",
    "render_public_sidebar",
    "render_backend_status",
]
