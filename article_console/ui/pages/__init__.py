"""Page components for the Article Console."""
from article_console.ui.pages.articles import render_articles_page
from article_console.ui.pages.article_detail import render_article_detail_page
from article_console.ui.pages.login import render_login_page
from article_console.ui.pages.register import render_register_page
from article_console.ui.pages.admin_articles import render_admin_articles_page
from article_console.ui.pages.admin_article_form import render_admin_article_form_page
from article_console.ui.pages.admin_categories import render_admin_categories_page
from article_console.ui.pages.admin_category_form import render_admin_category_form_page

__all__ = [
    # Public
    "render_articles_page",
    "render_article_detail_page",
    "render_login_page",
    "render_register_page",
    # Admin
    "render_admin_articles_page",
    "render_admin_article_form_page",
    "render_admin_categories_page",
    "render_admin_category_form_page",
]
