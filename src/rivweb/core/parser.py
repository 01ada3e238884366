"""Parser for the riv markup format.

Line forms::

    = Header text
    - list item
      - nested list item (two spaces per level)
    ! media/picture.png optional *styled* caption
    @ other-page
        indented lines form a preformatted block

Anything else is paragraph text; consecutive lines are joined and a
blank line ends the paragraph. Inline markup: ``*bold*``, ``_italic_``,
```mono```, ``[[page-id]]``, ``[[page-id|text]]`` and, for targets with
a URL scheme, ``[[https://example.com|text]]``.

The parser never fails: anything it does not recognise is plain text.
"""

import re

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
    Paragraph,
    Plain,
    StyledText,
)

LIST_INDENT = 2

# Pattern for links: [[target]] or [[target|Display Text]]
LINK_PATTERN = r"\[\[([^\]|]+)(?:\|([^\]]+))?\]\]"

INLINE_PATTERN = re.compile(
    LINK_PATTERN
    + r"|(?<!\w)\*([^*\n]+)\*(?!\w)"
    + r"|(?<!\w)_([^_\n]+)_(?!\w)"
    + r"|`([^`\n]+)`"
)

URL_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
LIST_ITEM_PATTERN = re.compile(r"^( *)- (.*)$")


def _leading_width(line: str) -> int:
    return len(line) - len(line.lstrip(" \t"))


def parse_styled(text: str) -> list[StyledText]:
    """Split a line of text into styled spans."""
    spans: list[StyledText] = []
    pos = 0
    for m in INLINE_PATTERN.finditer(text):
        if m.start() > pos:
            spans.append(Plain(value=text[pos : m.start()]))
        target, label, bold, italic, mono = m.groups()
        if target is not None:
            target = target.strip()
            label = label.strip() if label else ""
            if URL_SCHEME_PATTERN.match(target):
                spans.append(ExternalLink(value=label, target=target))
            else:
                spans.append(InternalLink(value=label, target=target))
        elif bold is not None:
            spans.append(Bold(value=bold))
        elif italic is not None:
            spans.append(Italic(value=italic))
        else:
            spans.append(Mono(value=mono))
        pos = m.end()
    if pos < len(text):
        spans.append(Plain(value=text[pos:]))
    return spans


def _parse_list(lines: list[str]) -> List:
    """Build a list tree from ``- item`` lines; depth comes from indentation."""
    root = List()
    # stack[d] holds the item list that receives items at depth d
    stack: list[list[ListItem]] = [root.items]
    for line in lines:
        m = LIST_ITEM_PATTERN.match(line)
        if m is None:
            continue
        depth = min(len(m.group(1)) // LIST_INDENT, len(stack) - 1)
        del stack[depth + 1 :]
        item = ListItem(value=parse_styled(m.group(2).strip()))
        stack[depth].append(item)
        stack.append(item.sublist)
    return root


def _parse_block(lines: list[str]) -> Block:
    widths = [_leading_width(line) for line in lines if line.strip()]
    return Block(lines=[line.rstrip() for line in lines], indent=min(widths, default=0))


def _parse_embed(rest: str) -> Embed:
    path, _, caption = rest.strip().partition(" ")
    caption = caption.strip()
    return Embed(path=path, caption=parse_styled(caption) if caption else [])


def parse(source: str) -> list[LineNode]:
    """Parse a riv document into line nodes."""
    lines = source.replace("\r\n", "\n").split("\n")
    nodes: list[LineNode] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        stripped = line.strip()

        if not stripped:
            i += 1
            continue

        if LIST_ITEM_PATTERN.match(line) and not line.startswith(" "):
            start = i
            i += 1
            while i < len(lines) and LIST_ITEM_PATTERN.match(lines[i]):
                i += 1
            nodes.append(_parse_list(lines[start:i]))
            continue

        if line[0] in " \t":
            start = i
            end = i + 1
            i += 1
            while i < len(lines) and (not lines[i].strip() or lines[i][0] in " \t"):
                if lines[i].strip():
                    end = i + 1
                i += 1
            # Trailing blank lines are not part of the block
            i = end
            nodes.append(_parse_block(lines[start:end]))
            continue

        marker, rest = line[0], line[1:]
        if marker == "=" and rest[:1] == " ":
            nodes.append(Header(text=rest.strip()))
        elif marker == "!" and rest[:1] == " " and rest.strip():
            nodes.append(_parse_embed(rest))
        elif marker == "@" and rest[:1] == " " and rest.strip():
            nodes.append(NavLink(target=rest.strip()))
        else:
            start = i
            i += 1
            while i < len(lines) and _continues_paragraph(lines[i]):
                i += 1
            text = " ".join(part.strip() for part in lines[start:i])
            nodes.append(Paragraph(spans=parse_styled(text)))
            continue
        i += 1

    return nodes


def _continues_paragraph(line: str) -> bool:
    if not line.strip() or line[0] in " \t":
        return False
    if LIST_ITEM_PATTERN.match(line):
        return False
    return not (line[0] in "=!@" and line[1:2] == " ")


def extract_nav_links(nodes: list[LineNode]) -> list[str]:
    """Return the targets of every navigation reference, in order."""
    return [node.target for node in nodes if isinstance(node, NavLink)]
