"""Shared fixtures for rivweb tests."""

from pathlib import Path

import pytest

from rivweb.config import Settings
from rivweb.core.diagnostics import Diagnostics
from rivweb.core.graph import PageGraph
from rivweb.core.links import LinkResolver
from rivweb.core.models import Page
from rivweb.core.render import HtmlRenderer

PAGE_TEMPLATE = """\
    <html>
        <head><title>$site:title - $site:name</title><style>$site:style</style></head>
        <body>
            <nav>$site:nav</nav>
            <main>$site:body</main>
            <a href="$site:link">$site:updated</a> <a href="$site:edit">edit</a> $site:year
        </body>
    </html>
"""

FEED_TEMPLATE = """\
<rss version="2.0"><channel>
    <title>$site:title</title>
    <description>$site:name</description>
    <lastBuildDate>$site:updated</lastBuildDate>
    $site:posts
</channel></rss>
"""


def _page(page_id: str) -> Page:
    return Page.from_filename(f"{page_id}.riv", ".riv", ".htm")


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at empty source/resource/output dirs under tmp_path."""
    return Settings(
        source_dir=tmp_path / "riv",
        resource_dir=tmp_path / "res",
        output_dir=tmp_path / "web",
        site_title="Test Site",
        site_url="https://example.org",
        repo_url="https://git.example.org/me/site",
        _env_file=None,
    )


@pytest.fixture
def site(settings) -> Path:
    """Create the source and resource directories with the required resources."""
    settings.source_dir.mkdir()
    settings.resource_dir.mkdir()
    (settings.resource_dir / "style.css").write_text("body {\n  color: black;\n}\n")
    (settings.resource_dir / "template.htm").write_text(PAGE_TEMPLATE)
    (settings.resource_dir / "feed.xml").write_text(FEED_TEMPLATE)
    return settings.source_dir


@pytest.fixture
def diagnostics() -> Diagnostics:
    return Diagnostics()


@pytest.fixture
def graph() -> PageGraph:
    g = PageGraph()
    for page_id in ("index", "about", "notes"):
        g.insert(_page(page_id))
    return g


@pytest.fixture
def resolver(graph, diagnostics, settings) -> LinkResolver:
    return LinkResolver(graph, diagnostics, settings)


@pytest.fixture
def renderer(resolver, diagnostics, settings) -> HtmlRenderer:
    settings.resource_dir.mkdir(exist_ok=True)
    return HtmlRenderer(resolver, diagnostics, settings.resource_dir)
