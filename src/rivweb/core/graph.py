"""Page graph: every page of a build, keyed by id."""

from collections.abc import Iterator

from rivweb.core.errors import DuplicatePageError
from rivweb.core.models import Page


class PageGraph:
    """Owns all pages of a run.

    Iteration is always sorted by page id so that anything whose order
    ends up in the output is reproducible between runs.
    """

    def __init__(self) -> None:
        self._pages: dict[str, Page] = {}

    def insert(self, page: Page) -> None:
        """Add a page. Raises DuplicatePageError if the id is taken."""
        if page.id in self._pages:
            raise DuplicatePageError(page.id)
        self._pages[page.id] = page

    def lookup(self, page_id: str) -> Page | None:
        """Get a page by id. Returns None if not found."""
        return self._pages.get(page_id)

    def ids(self) -> list[str]:
        return sorted(self._pages)

    def pages(self) -> list[Page]:
        return [self._pages[page_id] for page_id in self.ids()]

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages())

    def __len__(self) -> int:
        return len(self._pages)

    def __contains__(self, page_id: object) -> bool:
        return page_id in self._pages
