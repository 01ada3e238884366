"""Build diagnostics.

Problems found while building (broken links, orphaned pages, skipped
embeds) are collected here instead of aborting the build. Each entry
is also written to the log as it is recorded.
"""

import logging
from typing import Literal

from pydantic import BaseModel

from rivweb.core.graph import PageGraph

logger = logging.getLogger(__name__)

DiagnosticKind = Literal[
    "broken-link",
    "broken-nav",
    "orphan",
    "unsupported-embed",
    "unreadable-embed",
    "unreadable-page",
    "write-failed",
]


class Diagnostic(BaseModel):
    """One reported problem, attributed to a source file."""

    kind: DiagnosticKind
    page: str
    detail: str = ""


class Diagnostics:
    """Collects diagnostics for a single build."""

    def __init__(self) -> None:
        self.entries: list[Diagnostic] = []

    def _add(self, kind: DiagnosticKind, page: str, detail: str, msg: str, *args: object) -> None:
        self.entries.append(Diagnostic(kind=kind, page=page, detail=detail))
        logger.warning(msg, *args)

    def broken_link(self, page: str, target: str) -> None:
        self._add("broken-link", page, target, "'%s' has a broken internal link '%s'", page, target)

    def broken_nav(self, page: str, target: str) -> None:
        self._add("broken-nav", page, target, "page '%s' has a broken nav link '%s'", page, target)

    def orphan(self, page: str) -> None:
        self._add("orphan", page, "", "orphaned page '%s'", page)

    def unsupported_embed(self, page: str, ext: str) -> None:
        self._add(
            "unsupported-embed",
            page,
            ext,
            "'%s' references an unsupported media type '%s'",
            page,
            ext,
        )

    def unreadable_embed(self, page: str, path: str) -> None:
        self._add(
            "unreadable-embed", page, path, "unable to open embed '%s' within '%s'", path, page
        )

    def unreadable_page(self, page: str, error: str) -> None:
        self._add("unreadable-page", page, error, "unable to open page '%s': %s", page, error)

    def write_failed(self, page: str, error: str) -> None:
        self._add(
            "write-failed", page, error, "unable to create output file '%s': %s", page, error
        )

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.entries if d.kind == kind]

    @property
    def orphans(self) -> list[str]:
        return [d.page for d in self.of_kind("orphan")]

    def __len__(self) -> int:
        return len(self.entries)


def report_orphans(graph: PageGraph, home_page: str, diagnostics: Diagnostics) -> list[str]:
    """Flag every non-home page that nothing links to.

    Must run after every page has been rendered, since rendering one page
    bumps the reference counts of the pages it links to.

    Returns:
        Local names of the orphaned pages, in id order.
    """
    orphaned = []
    for page in graph:
        if page.id != home_page and page.ref_count == 0:
            diagnostics.orphan(page.local_name)
            orphaned.append(page.local_name)
    return orphaned
