"""RSS feed items built from rendered pages."""

from datetime import datetime
from html import escape

from rivweb.core.models import Page
from rivweb.core.templates import feed_date


def page_url(site_url: str, page: Page) -> str:
    return f"{site_url.rstrip('/')}/{page.out_name}"


def render_feed_item(page: Page, site_url: str, fallback: datetime) -> str:
    """Render one ``<item>``; the rendered page body is the description."""
    link = escape(page_url(site_url, page))
    published = feed_date(page.updated or fallback)
    return (
        "<item>"
        f"<title>{escape(page.name)}</title>"
        f"<link>{link}</link>"
        f'<guid isPermaLink="true">{link}</guid>'
        f"<pubDate>{published}</pubDate>"
        f"<description>{escape(page.rendered or '')}</description>"
        "</item>"
    )


def feed_pages(pages: list[Page]) -> list[Page]:
    """Rendered pages, newest first; ties are broken by id."""
    rendered = sorted((p for p in pages if p.rendered is not None), key=lambda p: p.id)
    return sorted(
        rendered,
        key=lambda p: p.updated.timestamp() if p.updated else 0.0,
        reverse=True,
    )


def render_posts(pages: list[Page], site_url: str, fallback: datetime) -> str:
    """Concatenate the feed items of every rendered page."""
    return "\n".join(render_feed_item(p, site_url, fallback) for p in feed_pages(pages))
