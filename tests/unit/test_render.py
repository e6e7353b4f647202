"""Tests for columnsite.render."""

import pytest

from columnsite.render import escape_html, extract_description, render_template, strip_tags


class TestExtractDescription:
    def test_strips_tags_and_collapses_whitespace(self) -> None:
        html = "<h2>Title</h2>\n<p>First   line\r\nsecond\tline</p>"
        assert extract_description(html) == "Title First line second line"

    def test_ignores_angle_brackets_inside_attributes(self) -> None:
        html = '<a title="a > b" href="/x">link</a> text'
        assert extract_description(html) == "link text"

    def test_truncates_with_ellipsis(self) -> None:
        html = "<p>" + "a" * 200 + "</p>"
        result = extract_description(html, max_length=120)
        assert result == "a" * 120 + "..."

    def test_text_at_limit_is_kept_whole(self) -> None:
        assert extract_description("b" * 120) == "b" * 120

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_input(self, value) -> None:
        assert extract_description(value) == ""

    @pytest.mark.parametrize(
        "html",
        [
            "<div><p>Some <strong>bold</strong> text</p></div>" * 20,
            '<img src="x.png" alt="<b>">' + "word " * 100,
            "<ul>" + "<li>item</li>" * 60 + "</ul>",
        ],
    )
    def test_never_contains_tags_or_exceeds_limit(self, html) -> None:
        result = extract_description(html, max_length=50)
        assert "<" not in result
        assert ">" not in result
        assert len(result) <= 53


class TestEscapeHtml:
    def test_escapes_reserved_characters(self) -> None:
        assert escape_html("""<a href="x">Tom & Jerry's</a>""") == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&#39;s&lt;/a&gt;"
        )

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_input(self, value) -> None:
        assert escape_html(value) == ""

    def test_escaping_twice_leaves_no_raw_reserved_characters(self) -> None:
        once = escape_html("""& < > " '""")
        twice = escape_html(once)
        stripped = twice
        for entity in ("&amp;", "&lt;", "&gt;", "&quot;", "&#39;"):
            stripped = stripped.replace(entity, "")
        assert not set(stripped) & set("&<>\"'")


class TestRenderTemplate:
    def test_replaces_every_occurrence(self) -> None:
        template = "<title>{{TITLE}}</title><h1>{{TITLE}}</h1>"
        assert render_template(template, TITLE="Hi") == "<title>Hi</title><h1>Hi</h1>"

    def test_unknown_tokens_are_left_alone(self) -> None:
        assert render_template("{{TITLE}} {{OTHER}}", TITLE="x") == "x {{OTHER}}"

    def test_body_is_inserted_verbatim(self) -> None:
        template = "<title>{{TITLE}}</title><main>{{BODY_HTML}}</main>"
        body = "<p>Use {{TITLE}} in templates</p>"
        result = render_template(template, BODY_HTML=body, TITLE="Docs")
        assert result == "<title>Docs</title><main><p>Use {{TITLE}} in templates</p></main>"


def test_strip_tags() -> None:
    assert strip_tags("<p>a<br/>b</p>") == "ab"


def test_token_text_inside_a_value_is_not_expanded() -> None:
    template = '<meta content="{{DESCRIPTION}}">{{BODY_HTML}}'
    result = render_template(template, DESCRIPTION="How {{BODY_HTML}} works", BODY_HTML="<p>body</p>")
    assert result == '<meta content="How {{BODY_HTML}} works"><p>body</p>'


def test_values_with_backslashes_are_inserted_literally() -> None:
    assert render_template("{{PATH}}", PATH=r"C:\new\1") == r"C:\new\1"
