"""Tests for the post content rendering pipeline."""

import pytest

from src.apps.blog.models.post import ContentType
from src.apps.blog.services.render_service import (
    escape_html,
    excerpt,
    render_content,
    render_markdown,
    strip_duplicate_title,
)


class TestEscapeHtml:
    def test_escapes_all_special_characters(self):
        assert escape_html("<a href=\"x\">Tom's & Jerry</a>") == (
            "&lt;a href=&quot;x&quot;&gt;Tom&#039;s &amp; Jerry&lt;/a&gt;"
        )

    def test_ampersand_escaped_once(self):
        assert escape_html("&lt;") == "&amp;lt;"
        assert escape_html("<") == "&lt;"

    def test_empty_string(self):
        assert escape_html("") == ""

    def test_newlines_untouched(self):
        assert escape_html("a\nb") == "a\nb"

    @pytest.mark.parametrize("text", ["<script>alert('x')</script>", "\"quoted\" & 'single'", "plain"])
    def test_output_has_no_raw_special_characters(self, text):
        escaped = escape_html(text)
        for char in "<>\"'":
            assert char not in escaped
        stripped = escaped
        for entity in ("&amp;", "&lt;", "&gt;", "&quot;", "&#039;"):
            stripped = stripped.replace(entity, "")
        assert "&" not in stripped


class TestRenderMarkdown:
    def test_empty_input(self):
        assert render_markdown("") == ""

    def test_headings(self):
        html = render_markdown("# One\n\n## Two\n\n### Three")
        assert "<h1>One</h1>" in html
        assert "<h2>Two</h2>" in html
        assert "<h3>Three</h3>" in html

    def test_emphasis(self):
        html = render_markdown("**bold** and *italic*")
        assert "<strong>bold</strong>" in html
        assert "<em>italic</em>" in html

    def test_fenced_code_is_not_reinterpreted(self):
        html = render_markdown("```\n# fake heading\n- not a list\n```")
        assert "<h1>" not in html
        assert "<li>" not in html
        assert "<code># fake heading\n- not a list\n</code>" in html

    def test_inline_code(self):
        html = render_markdown("Use `**raw**` here")
        assert "<code>**raw**</code>" in html
        assert "<strong>" not in html

    def test_link(self):
        html = render_markdown("[Example](https://x.test)")
        assert '<a href="https://x.test">Example</a>' in html

    def test_blockquote_and_rule(self):
        html = render_markdown("> quoted\n\n---")
        assert "<blockquote>" in html
        assert "<hr />" in html

    def test_unordered_list_is_one_container(self):
        html = render_markdown("- a\n- b")
        assert html.count("<ul>") == 1
        assert html.count("<li>") == 2

    def test_ordered_list_is_one_container(self):
        html = render_markdown("1. a\n2. b")
        assert html.count("<ol>") == 1
        assert html.count("<li>") == 2

    def test_table(self):
        html = render_markdown("| a | b |\n| --- | --- |\n| 1 | 2 |")
        assert "<table>" in html
        assert "<td>1</td>" in html

    def test_single_newline_becomes_line_break(self):
        assert "<br />" in render_markdown("line one\nline two")

    def test_raw_html_is_escaped(self):
        html = render_markdown("<script>alert(1)</script>\n\nText <b>bold</b>")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "<b>" not in html

    def test_unterminated_fence_runs_to_end(self):
        html = render_markdown("Intro\n\n```\n# still code\nmore")
        assert "<h1>" not in html
        assert "# still code\nmore" in html
        assert html.rstrip().endswith("</code></pre>")

    def test_deterministic(self):
        source = "# Title\n\n- a\n- b\n\n`x`"
        assert render_markdown(source) == render_markdown(source)


class TestStripDuplicateTitle:
    def test_removes_matching_heading(self):
        html = render_markdown("# A.B*C\n\nBody text")
        stripped = strip_duplicate_title(html, "A.B*C")
        assert "<h1>" not in stripped
        assert stripped.startswith("<p>Body text</p>")

    def test_metacharacters_match_literally(self):
        html = render_markdown("# AxB\n\nBody")
        assert strip_duplicate_title(html, "A.B") == html

    def test_case_insensitive_and_trimmed(self):
        html = "<h1> Hello World </h1>\n<p>Body</p>"
        assert strip_duplicate_title(html, "  hello world ") == "<p>Body</p>"

    def test_level_two_heading_is_kept(self):
        html = render_markdown("## Hello\n\nBody")
        assert strip_duplicate_title(html, "Hello") == html

    def test_only_leading_heading_is_eligible(self):
        html = render_markdown("Intro\n\n# Hello\n\nBody")
        assert strip_duplicate_title(html, "Hello") == html

    def test_different_title_is_kept(self):
        html = render_markdown("# Other\n\nBody")
        assert strip_duplicate_title(html, "Hello") == html

    def test_title_with_entities(self):
        html = render_markdown("# Tips & Tricks\n\nBody")
        assert strip_duplicate_title(html, "Tips & Tricks").startswith("<p>Body</p>")

    def test_second_pass_changes_nothing(self):
        html = render_markdown("# Hello\n\n# Hello\n\nBody")
        once = strip_duplicate_title(html, "Hello")
        assert once.startswith("<h1>Hello</h1>")
        html = render_markdown("# Hello\n\nBody")
        once = strip_duplicate_title(html, "Hello")
        assert strip_duplicate_title(once, "Hello") == once

    def test_blank_title(self):
        html = render_markdown("# Hello")
        assert strip_duplicate_title(html, "   ") == html


class TestRenderContent:
    def test_empty_content(self):
        assert render_content("", ContentType.MARKDOWN, "") == ""
        assert render_content(None, ContentType.PLAIN, "x") == ""

    def test_markdown_strips_title(self):
        html = render_content("# Hello\n\nBody", ContentType.MARKDOWN, "Hello")
        assert html == "<p>Body</p>\n"

    def test_plain_is_escaped_with_line_breaks(self):
        html = render_content("a < b\nnext", ContentType.PLAIN, "t")
        assert html == "a &lt; b<br>next"

    def test_html_is_not_trusted(self):
        html = render_content("<img src=x onerror=alert(1)>", ContentType.HTML, "t")
        assert html == "&lt;img src=x onerror=alert(1)&gt;"

    def test_accepts_string_content_type(self):
        assert render_content("**b**", "markdown") == "<p><strong>b</strong></p>\n"
        assert render_content("**b**", "plain") == "**b**"


class TestExcerpt:
    def test_strips_markup(self):
        source = "# Title\n\nSome **bold** [link](https://x.test) text.\n\n```\ncode\n```"
        assert excerpt(source) == "Title Some bold link text."

    def test_truncates_on_word_boundary(self):
        text = excerpt("word " * 100, limit=50)
        assert len(text) <= 50
        assert text.endswith("...")
        assert not text[:-3].endswith(" ")

    def test_empty(self):
        assert excerpt(None) == ""
        assert excerpt("```\nonly code\n```") == ""
