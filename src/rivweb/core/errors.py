"""Exceptions raised by the site builder."""


class RivwebError(Exception):
    """Base class for rivweb errors."""


class DuplicatePageError(RivwebError):
    """Two source files map to the same page id."""

    def __init__(self, page_id: str):
        super().__init__(f"duplicate page id '{page_id}'")
        self.page_id = page_id


class FatalBuildError(RivwebError):
    """A global resource is missing; the build cannot start.

    ``code`` is the process exit status for the condition.
    """

    STYLESHEET = 1
    PAGE_TEMPLATE = 2
    SOURCE_DIR = 3
    OUTPUT_DIR = 4
    FEED_TEMPLATE = 5

    def __init__(self, message: str, code: int):
        super().__init__(message)
        self.code = code
