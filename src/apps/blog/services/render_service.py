"""Post content rendering.

Turns a stored post body into an HTML fragment that the front end can
insert as trusted markup:

    markdown  ->  render_markdown  ->  strip_duplicate_title
    plain     ->  escape_html      ->  newlines to <br>
    html      ->  treated as plain; stored HTML is never trusted

Markdown goes through markdown-it-py with raw HTML disabled, so markup
typed into a post is escaped rather than passed through, and fenced code
is tokenized as a block before any inline rule sees it.
"""

import re
from typing import Optional, Union

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml

from src.apps.blog.models.post import ContentType

_md = MarkdownIt(
    "commonmark",
    {
        "html": False,
        "breaks": True,
    },
)
_md.enable(["table", "strikethrough"])

# Applied in order; "&" must come first so later entities are not re-escaped
_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)

LINE_BREAK = "<br>"


def escape_html(text: str) -> str:
    """Replace the five HTML-significant characters with entities."""
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def render_markdown(source: str) -> str:
    """Render Markdown source to an HTML fragment."""
    if not source:
        return ""
    return _md.render(source)


def strip_duplicate_title(html: str, title: str) -> str:
    """Drop a leading <h1> that repeats the post title.

    Only a level-1 heading at the very start of the fragment is eligible,
    and the comparison ignores case and surrounding whitespace.
    """
    title = (title or "").strip()
    if not html or not title:
        return html

    # Heading text in the rendered fragment is entity-escaped by the renderer
    pattern = re.compile(
        r"^\s*<h1[^>]*>\s*" + re.escape(escapeHtml(title)) + r"\s*</h1>\s*",
        re.IGNORECASE,
    )
    return pattern.sub("", html, count=1)


def render_plain(text: str) -> str:
    return escape_html(text).replace("\n", LINE_BREAK)


def render_content(
    content: Optional[str],
    content_type: Union[ContentType, str, None] = ContentType.MARKDOWN,
    title: str = "",
) -> str:
    """Render a post body according to its content type."""
    if not content:
        return ""

    if content_type == ContentType.MARKDOWN:
        return strip_duplicate_title(render_markdown(content), title)

    return render_plain(content)


_CODE_FENCE_RE = re.compile(r"```[\s\S]*?```")
_INLINE_CODE_RE = re.compile(r"`[^`]*`")
_IMAGE_RE = re.compile(r"!\[[^\]]*]\([^)]+\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_MARKUP_CHARS_RE = re.compile(r"[#>*_~-]")
_WHITESPACE_RE = re.compile(r"\s+")


def excerpt(markdown: Optional[str], limit: int = 180) -> str:
    """Plain-text preview of a Markdown body, cut on a word boundary."""
    if not markdown:
        return ""

    text = _CODE_FENCE_RE.sub(" ", markdown)
    text = _INLINE_CODE_RE.sub(" ", text)
    text = _IMAGE_RE.sub(" ", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _MARKUP_CHARS_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text).strip()

    if len(text) <= limit:
        return text

    cut = text[: max(limit - 3, 0)]
    last_space = cut.rfind(" ")
    if last_space > len(cut) // 2:
        cut = cut[:last_space]
    return cut.rstrip() + "..."
