"""Per-page navigation lists."""

from rivweb.core.graph import PageGraph
from rivweb.core.links import CLASS_INTERNAL_LINK, anchor
from rivweb.core.models import Page

CLASS_LIST = "list"
CLASS_LIST_ITEM = "list-item"


def build_nav(graph: PageGraph, page: Page) -> list[Page]:
    """Return the pages ``page`` navigates to, sorted by id."""
    targets = (graph.lookup(page_id) for page_id in sorted(set(page.nav)))
    return [t for t in targets if t is not None and t.id != page.id]


def render_nav(graph: PageGraph, page: Page) -> str:
    """Render the navigation list of ``page`` as an HTML list."""
    items = "".join(
        f'<li class="{CLASS_LIST_ITEM}">{anchor(t.out_name, t.name, CLASS_INTERNAL_LINK)}</li>'
        for t in build_nav(graph, page)
    )
    return f'<ul class="{CLASS_LIST}">{items}</ul>'
