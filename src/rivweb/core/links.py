"""Link resolution between pages."""

from html import escape

from rivweb.config import Settings
from rivweb.core.diagnostics import Diagnostics
from rivweb.core.graph import PageGraph
from rivweb.core.models import ExternalLink, InternalLink, Page


CLASS_INTERNAL_LINK = "internal link"
CLASS_EXTERNAL_LINK = "external link"
CLASS_BROKEN = "broken"


def anchor(href: str, text: str, css_class: str, new_tab: bool = False) -> str:
    """Render an HTML anchor. ``text`` is inserted as-is."""
    target = ' target="_blank"' if new_tab else ""
    return f'<a class="{css_class}" href="{escape(href)}"{target}>{text}</a>'


class LinkResolver:
    """Resolves internal, external and navigation links against the page graph."""

    def __init__(self, graph: PageGraph, diagnostics: Diagnostics, settings: Settings):
        self.graph = graph
        self.diagnostics = diagnostics
        self.settings = settings

    def new_file_url(self, page_id: str) -> str:
        """URL of the repository's "create file" action, pre-filled with the page."""
        s = self.settings
        return (
            f"{s.repo_url}/new/{s.repo_branch}/{s.source_dir.name}"
            f"?filename={page_id}{s.source_ext}"
        )

    def edit_url(self, page: Page) -> str:
        """URL for editing a page's source in the repository."""
        s = self.settings
        return f"{s.repo_url}/edit/{s.repo_branch}/{s.source_dir.name}/{page.local_name}"

    def resolve(self, source: Page, link: InternalLink) -> str:
        """Render an internal link found in the body of ``source``.

        A known target gets one more reference per link rendered, unless it
        is ``source`` itself. An
        unknown target becomes a visibly broken anchor pointing at the
        "create file" URL for the missing page.
        """
        target = self.graph.lookup(link.target)
        if target is None:
            self.diagnostics.broken_link(source.local_name, link.target)
            return anchor(
                self.new_file_url(link.target),
                link.value or link.target,
                f"{CLASS_BROKEN} {CLASS_EXTERNAL_LINK}",
                new_tab=True,
            )

        if target.id != source.id:
            target.ref_count += 1
        return anchor(target.out_name, link.value or target.name, CLASS_INTERNAL_LINK)

    def external(self, link: ExternalLink) -> str:
        """Render a link leaving the site. Always opens in a new tab."""
        return anchor(link.target, link.value or link.target, CLASS_EXTERNAL_LINK, new_tab=True)

    def resolve_nav(self, source: Page, target_id: str) -> None:
        """Record a navigation reference from ``source`` to ``target_id``.

        Navigation references do not count towards ``ref_count``.
        """
        if target_id not in self.graph:
            self.diagnostics.broken_nav(source.local_name, target_id)
            return
        if target_id == source.id or target_id in source.nav:
            return
        source.nav.append(target_id)
