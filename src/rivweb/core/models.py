"""Data models for rivweb pages and their parsed bodies."""

import re
from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


# ============================================================
# Styled text spans
# ============================================================


class Plain(BaseModel):
    style: Literal["plain"] = "plain"
    value: str


class Italic(BaseModel):
    style: Literal["italic"] = "italic"
    value: str


class Bold(BaseModel):
    style: Literal["bold"] = "bold"
    value: str


class Mono(BaseModel):
    style: Literal["mono"] = "mono"
    value: str


class InternalLink(BaseModel):
    """Link to another page by id. ``value`` is the optional display text."""

    style: Literal["internal-link"] = "internal-link"
    value: str = ""
    target: str


class ExternalLink(BaseModel):
    """Link to an arbitrary URL. ``value`` is the optional display text."""

    style: Literal["external-link"] = "external-link"
    value: str = ""
    target: str


StyledText = Annotated[
    Union[Plain, Italic, Bold, Mono, InternalLink, ExternalLink],
    Field(discriminator="style"),
]


# ============================================================
# Line nodes
# ============================================================


class Header(BaseModel):
    kind: Literal["header"] = "header"
    text: str


class Paragraph(BaseModel):
    kind: Literal["paragraph"] = "paragraph"
    spans: list[StyledText] = Field(default_factory=list)


class ListItem(BaseModel):
    value: list[StyledText] = Field(default_factory=list)
    sublist: list["ListItem"] = Field(default_factory=list)


class List(BaseModel):
    kind: Literal["list"] = "list"
    items: list[ListItem] = Field(default_factory=list)


class Block(BaseModel):
    """Preformatted lines; ``indent`` leading characters are stripped on output."""

    kind: Literal["block"] = "block"
    lines: list[str] = Field(default_factory=list)
    indent: int = 0


class Embed(BaseModel):
    kind: Literal["embed"] = "embed"
    path: str
    caption: list[StyledText] = Field(default_factory=list)


class NavLink(BaseModel):
    kind: Literal["nav-link"] = "nav-link"
    target: str


LineNode = Annotated[
    Union[Header, Paragraph, List, Block, Embed, NavLink],
    Field(discriminator="kind"),
]


# ============================================================
# Pages
# ============================================================


def display_name_for(page_id: str) -> str:
    """Derive a human-readable name from a page id.

    ``my-first_page`` becomes ``My First Page``.
    """
    words = re.split(r"[-_\s]+", page_id)
    return " ".join(w[:1].upper() + w[1:] for w in words if w)


def normalize_heading(text: str) -> str:
    """Normalize a heading for comparison against a display name."""
    return " ".join(re.split(r"[-_\s]+", text.lower())).strip()


class Page(BaseModel):
    """Represents one source document and its rendering state."""

    id: str = Field(frozen=True)
    local_name: str
    display_name: str
    out_name: str
    title: str | None = None
    body: list[LineNode] = Field(default_factory=list)
    # Ids of linked pages, resolved through the graph on use
    nav: list[str] = Field(default_factory=list)
    ref_count: int = 0
    updated: datetime | None = None
    rendered: str | None = None
    loaded: bool = False

    @classmethod
    def from_filename(cls, filename: str, source_ext: str, output_ext: str) -> "Page":
        """Create a page for a source file such as ``about-me.riv``."""
        page_id = filename.removesuffix(source_ext)
        return cls(
            id=page_id,
            local_name=filename,
            display_name=display_name_for(page_id),
            out_name=page_id + output_ext,
        )

    @property
    def name(self) -> str:
        """Return the title override or the derived display name."""
        return self.title or self.display_name

    def apply_heading(self, text: str) -> None:
        """Use ``text`` as the title when it says more than the display name."""
        if normalize_heading(text) != normalize_heading(self.display_name):
            self.title = text.strip()
