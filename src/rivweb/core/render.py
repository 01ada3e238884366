"""HTML rendering of parsed page bodies."""

import base64
import logging
from pathlib import Path, PurePosixPath
from typing import assert_never

from rivweb.core.diagnostics import Diagnostics
from rivweb.core.links import LinkResolver
from rivweb.core.models import (
    Block,
    Bold,
    Embed,
    ExternalLink,
    Header,
    InternalLink,
    Italic,
    LineNode,
    List,
    ListItem,
    Mono,
    NavLink,
    Page,
    Paragraph,
    Plain,
    StyledText,
)
from rivweb.core.nav import CLASS_LIST, CLASS_LIST_ITEM

logger = logging.getLogger(__name__)

CLASS_P = "paragraph"
CLASS_H1 = "title"
CLASS_H2 = "header"
CLASS_PRE = "code"
CLASS_BOLD = "bold"
CLASS_ITALIC = "italic"
CLASS_MONO = "mono"
CLASS_SEPARATOR = "separator"
CLASS_EMBED = "embed"
CLASS_CAPTION = "embed-caption"

SEPARATOR_TEXT = ". . ."

# Extension -> (MIME type, CSS class, element)
MEDIA_TYPES: dict[str, tuple[str, str, str]] = {
    ".png": ("image/png", "image", "img"),
    ".jpg": ("image/jpeg", "image", "img"),
    ".jpeg": ("image/jpeg", "image", "img"),
    ".gif": ("image/gif", "image", "img"),
    ".svg": ("image/svg+xml", "vector", "img"),
    ".ogg": ("audio/ogg", "sound", "audio"),
    ".mp3": ("audio/mpeg", "sound", "audio"),
}


def encode_data_uri(data: bytes, mime: str) -> str:
    """Encode raw bytes as a base64 ``data:`` URI."""
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def escape_block_line(line: str) -> str:
    return line.replace("<", "&lt;").replace(">", "&gt;")


def is_separator(node: Paragraph) -> bool:
    """A paragraph holding only ``. . .`` is drawn as a horizontal rule."""
    return (
        len(node.spans) == 1
        and isinstance(node.spans[0], Plain)
        and node.spans[0].value == SEPARATOR_TEXT
    )


class HtmlRenderer:
    """Renders page bodies to HTML fragments.

    Embedded media is read from ``resource_dir`` and inlined as data URIs.
    Internal links go through the resolver, which counts references.
    """

    def __init__(
        self,
        resolver: LinkResolver,
        diagnostics: Diagnostics,
        resource_dir: Path,
    ):
        self.resolver = resolver
        self.diagnostics = diagnostics
        self.resource_dir = resource_dir

    def render(self, page: Page, body: list[LineNode] | None = None) -> str:
        """Render ``body`` (the page's own body by default) to HTML."""
        if body is None:
            body = page.body
        parts: list[str] = []
        seen_header = False
        for node in body:
            if isinstance(node, Header):
                parts.append(self.render_header(node, first=not seen_header))
                seen_header = True
            else:
                parts.append(self.render_node(page, node))
        return "".join(parts)

    def render_header(self, node: Header, first: bool) -> str:
        if first:
            return f'<h1 class="{CLASS_H1}">{node.text}</h1>'
        return f'<h2 class="{CLASS_H2}">{node.text}</h2>'

    def render_node(self, page: Page, node: LineNode) -> str:
        match node:
            case Header():
                return self.render_header(node, first=False)
            case Paragraph():
                if is_separator(node):
                    return f'<hr class="{CLASS_SEPARATOR}"/>'
                return f'<p class="{CLASS_P}">{self.render_text(page, node.spans)}</p>'
            case List():
                return self.render_list(page, node.items)
            case Block():
                return self.render_block(node)
            case Embed():
                return self.render_embed(page, node)
            case NavLink():
                # Consumed by the pre-pass; never part of the body
                return ""
            case _:
                assert_never(node)

    def render_list(self, page: Page, items: list[ListItem]) -> str:
        parts = [f'<ul class="{CLASS_LIST}">']
        for item in items:
            parts.append(f'<li class="{CLASS_LIST_ITEM}">{self.render_text(page, item.value)}')
            if item.sublist:
                parts.append(self.render_list(page, item.sublist))
            parts.append("</li>")
        parts.append("</ul>")
        return "".join(parts)

    def render_block(self, node: Block) -> str:
        lines = [escape_block_line(line[node.indent :]) for line in node.lines]
        return f'<pre class="{CLASS_PRE}">' + "\n".join(lines) + "</pre>"

    def render_embed(self, page: Page, node: Embed) -> str:
        """Inline an image or sound. Returns "" when the embed is skipped."""
        ext = PurePosixPath(node.path).suffix.lower()
        if ext not in MEDIA_TYPES:
            self.diagnostics.unsupported_embed(page.local_name, ext)
            return ""

        root = self.resource_dir.resolve()
        path = (root / node.path).resolve()
        if not path.is_relative_to(root):
            self.diagnostics.unreadable_embed(page.local_name, node.path)
            return ""

        try:
            data = path.read_bytes()
        except OSError:
            self.diagnostics.unreadable_embed(page.local_name, node.path)
            return ""

        mime, css_class, element = MEDIA_TYPES[ext]
        src = encode_data_uri(data, mime)
        if element == "audio":
            media = f"<audio class=\"{css_class}\" loop controls src='{src}'></audio>"
        else:
            media = f"<img class=\"{css_class}\" src='{src}'/>"

        caption = ""
        if node.caption:
            caption = (
                f'<figcaption class="{CLASS_CAPTION}">'
                f"{self.render_text(page, node.caption)}</figcaption>"
            )
        logger.debug("embedded %s (%d bytes) in %s", node.path, len(data), page.local_name)
        return f'<figure class="{CLASS_EMBED}">{media}{caption}</figure>'

    def render_text(self, page: Page, spans: list[StyledText]) -> str:
        """Render styled spans. Plain text is emitted without escaping."""
        return "".join(self.render_span(page, span) for span in spans)

    def render_span(self, page: Page, span: StyledText) -> str:
        match span:
            case Plain():
                return span.value
            case Italic():
                return f'<em class="{CLASS_ITALIC}">{span.value}</em>'
            case Bold():
                return f'<strong class="{CLASS_BOLD}">{span.value}</strong>'
            case Mono():
                return f'<code class="{CLASS_MONO}">{span.value}</code>'
            case InternalLink():
                return self.resolver.resolve(page, span)
            case ExternalLink():
                return self.resolver.external(span)
            case _:
                assert_never(span)
