"""
Unit tests for escaping and user-facing messages in UI components.
"""
import requests

from article_console.utils import escape_text, escape_markdown, format_date, truncate, sanitize_html, html_to_text
from article_console.utils.exceptions import ApiError, ConsoleError, RequestCancelledError, DEFAULT_ERROR_MESSAGE
from article_console.ui.components.article_card import (
    build_article_card_html,
    build_article_body_html,
    NO_CATEGORY_LABEL,
)
from article_console.ui.components.notifications import describe_error, NETWORK_ERROR_MESSAGE


class TestHTMLEscaping:
    """Tests for HTML escaping of backend text."""

    def test_escape_script_tags(self):
        """Test that script tags are escaped."""
        escaped = escape_text("<script>alert('xss')</script>")

        assert "<script>" not in escaped
        assert "&lt;script&gt;" in escaped

    def test_escape_none(self):
        """Test None becomes an empty string."""
        assert escape_text(None) == ""

    def test_card_escapes_title_and_category(self):
        """Test the article card never renders raw markup."""
        article = {
            "title": '<img src=x onerror=alert("xss")>',
            "content": "<b>bold</b>",
            "category": {"name": "<i>News</i>"},
        }
        card = build_article_card_html(article)

        assert "<img" not in card
        assert "<b>" not in card
        assert "<i>" not in card
        assert "&lt;i&gt;News&lt;/i&gt;" in card

    def test_card_without_category(self):
        """Test the fallback category label."""
        card = build_article_card_html({"title": "T", "content": "C"})
        assert NO_CATEGORY_LABEL in card
        assert "Untitled" not in card

    def test_card_preview_is_plain_text(self):
        """Test body markup is stripped from the card preview, not shown as tags."""
        card = build_article_card_html({"title": "T", "content": "<p>Hello <strong>world</strong></p>"})

        assert "Hello world" in card
        assert "&lt;strong&gt;" not in card
        assert "<strong>" not in card


class TestArticleBodySanitizing:
    """Tests for cleaning rich article bodies."""

    def test_script_removed(self):
        """Test script elements and their content are dropped."""
        cleaned = sanitize_html("<p>Hi</p><script>alert('xss')</script>")

        assert "<script" not in cleaned
        assert "alert" not in cleaned
        assert "<p>Hi</p>" in cleaned

    def test_event_handlers_removed(self):
        """Test inline handlers are stripped from allowed tags."""
        cleaned = sanitize_html('<img src="https://img.test/a.png" onerror="alert(1)">')

        assert "onerror" not in cleaned
        assert "https://img.test/a.png" in cleaned

    def test_javascript_links_removed(self):
        """Test javascript: URLs do not survive."""
        cleaned = sanitize_html('<a href="javascript:alert(1)">click</a>')

        assert "javascript:" not in cleaned
        assert "click" in cleaned

    def test_formatting_kept(self):
        """Test ordinary formatting renders as formatting."""
        cleaned = sanitize_html("<p>Some <strong>bold</strong> and <em>italic</em></p><ul><li>one</li></ul>")

        assert "<strong>bold</strong>" in cleaned
        assert "<em>italic</em>" in cleaned
        assert "<li>one</li>" in cleaned

    def test_empty_body(self):
        """Test missing bodies render as nothing."""
        assert sanitize_html(None) == ""
        assert sanitize_html("") == ""

    def test_html_to_text(self):
        """Test tags are dropped, entities decoded and whitespace collapsed."""
        assert html_to_text("<p>Fish &amp; chips</p>\n<p>today</p>") == "Fish & chips today"
        assert html_to_text(None) == ""

    def test_html_to_text_drops_script_content(self):
        """Test script source never leaks into previews."""
        assert html_to_text("<script>steal()</script>Hello") == "Hello"

    def test_body_html_escapes_title_and_category(self):
        """Test plain-text fields are escaped while the body keeps formatting."""
        body = build_article_body_html(
            title="<script>alert(1)</script>",
            content="<p><strong>Bold</strong></p><img src=x onerror=alert(1)>",
            category_name="<i>News</i>",
            image_url="https://img.test/a.png' onerror='alert(1)",
        )

        assert "<script>" not in body
        assert "&lt;script&gt;" in body
        assert "&lt;i&gt;News&lt;/i&gt;" in body
        assert "<strong>Bold</strong>" in body
        assert "onerror=alert" not in body
        assert "onerror='alert" not in body

    def test_body_html_defaults(self):
        """Test an empty draft still renders a heading and no image."""
        body = build_article_body_html(title="", content=None)

        assert "Untitled" in body
        assert "<img" not in body


class TestMarkdownEscaping:
    """Tests for text shown through st.markdown, st.title and st.caption."""

    def test_link_syntax_neutralized(self):
        """Test a title cannot become a link."""
        escaped = escape_markdown("[x](javascript:alert(1))")

        assert "\\[x\\]" in escaped
        assert "\\(javascript\\:alert\\(1\\)\\)" in escaped

    def test_image_syntax_neutralized(self):
        """Test a title cannot pull in a remote image."""
        escaped = escape_markdown("![](http://img.test/track.png)")

        assert escaped.startswith("\\!\\[\\]\\(")

    def test_emphasis_and_directives_neutralized(self):
        """Test emphasis and colour directives are shown literally."""
        assert escape_markdown("**bold**") == "\\*\\*bold\\*\\*"
        assert escape_markdown(":red[alert]") == "\\:red\\[alert\\]"

    def test_plain_text_untouched(self):
        """Test ordinary words pass through."""
        assert escape_markdown("Hello world") == "Hello world"
        assert escape_markdown(None) == ""


class TestTextHelpers:
    """Tests for display formatting."""

    def test_truncate_short(self):
        """Test short text is untouched."""
        assert truncate("hello", 10) == "hello"

    def test_truncate_long(self):
        """Test long text is cut with an ellipsis."""
        result = truncate("a" * 50, 20)
        assert len(result) == 20
        assert result.endswith("...")

    def test_format_date(self):
        """Test ISO timestamps are rendered as day month year."""
        assert format_date("2025-06-05T10:00:00.000Z") == "5 June 2025"

    def test_format_date_unparseable(self):
        """Test garbage is shown as-is."""
        assert format_date("yesterday") == "yesterday"
        assert format_date(None) == ""


class TestDescribeError:
    """Tests for error-to-message mapping."""

    def test_cancellation_is_silent(self):
        """Test cancelled requests produce no message."""
        assert describe_error(RequestCancelledError()) is None

    def test_api_error_message(self):
        """Test backend messages are shown."""
        assert describe_error(ApiError("Article not found", status=404)) == "Article not found"

    def test_api_error_fallback(self):
        """Test an ApiError without message shows the fallback."""
        assert describe_error(ApiError("")) == DEFAULT_ERROR_MESSAGE

    def test_transport_error(self):
        """Test network failures get the connection message."""
        assert describe_error(requests.exceptions.ConnectionError()) == NETWORK_ERROR_MESSAGE

    def test_console_error(self):
        """Test other console errors show their message."""
        assert describe_error(ConsoleError("Image URL not found in response")) == "Image URL not found in response"

    def test_unknown_error(self):
        """Test anything else gets the fallback."""
        assert describe_error(KeyError("x")) == DEFAULT_ERROR_MESSAGE
        assert describe_error(KeyError("x"), fallback="Nope") == "Nope"
