"""Site build: index pages, resolve navigation, render, write the feed."""

import logging
from dataclasses import dataclass
from datetime import datetime

from rivweb.config import Settings
from rivweb.core.diagnostics import Diagnostics, report_orphans
from rivweb.core.errors import FatalBuildError
from rivweb.core.feed import render_posts
from rivweb.core.graph import PageGraph
from rivweb.core.links import LinkResolver
from rivweb.core.models import Header, Page
from rivweb.core.nav import render_nav
from rivweb.core.parser import extract_nav_links, parse
from rivweb.core.render import HtmlRenderer
from rivweb.core.storage import FileStorage
from rivweb.core.templates import (
    feed_tokens,
    page_tokens,
    prepare_stylesheet,
    prepare_template,
    substitute,
)

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    graph: PageGraph
    diagnostics: Diagnostics
    generated: int = 0


class SiteBuilder:
    """Builds the whole site in one sequential run.

    The pre-pass parses every page and fills in navigation and titles;
    the render pass then writes each page. Rendering a page updates the
    reference counts of the pages it links to, so orphan detection and
    the feed only run once every page has been rendered.
    """

    def __init__(
        self,
        settings: Settings,
        diagnostics: Diagnostics | None = None,
        now: datetime | None = None,
    ):
        self.settings = settings
        self.diagnostics = diagnostics or Diagnostics()
        self.now = now or datetime.now().astimezone()
        self.storage = FileStorage(settings)
        self.graph = PageGraph()
        self.resolver = LinkResolver(self.graph, self.diagnostics, settings)
        self.renderer = HtmlRenderer(self.resolver, self.diagnostics, settings.resource_dir)

    def build(self) -> BuildResult:
        """Run the build. Raises FatalBuildError before any page work if set-up fails."""
        s = self.settings
        style = prepare_stylesheet(
            self.storage.read_resource(s.stylesheet, FatalBuildError.STYLESHEET)
        )
        template = prepare_template(
            self.storage.read_resource(s.page_template, FatalBuildError.PAGE_TEMPLATE)
        )
        feed_template = prepare_template(
            self.storage.read_resource(s.feed_template, FatalBuildError.FEED_TEMPLATE)
        )

        self.index()
        self.storage.ensure_output_dir()

        for page in self.graph:
            self.prepare_page(page)

        generated = 0
        for page in self.graph:
            if page.loaded and self.write_page(page, template, style):
                generated += 1

        report_orphans(self.graph, s.home_page, self.diagnostics)
        self.write_feed(feed_template)
        logger.info("generated pages %d", generated)
        return BuildResult(graph=self.graph, diagnostics=self.diagnostics, generated=generated)

    def index(self) -> None:
        """Add a page to the graph for every source file."""
        s = self.settings
        for filename in self.storage.scan():
            self.graph.insert(Page.from_filename(filename, s.source_ext, s.output_ext))
            logger.info("indexed %s", filename)

    def prepare_page(self, page: Page) -> None:
        """Pre-pass: load and parse a page, take its title and nav links."""
        try:
            source = self.storage.read_source(page.local_name)
            page.updated = self.storage.source_mtime(page.local_name)
        except (OSError, UnicodeDecodeError) as e:
            self.diagnostics.unreadable_page(page.local_name, str(e))
            return

        page.body = parse(source)
        page.loaded = True

        first_header = next((n for n in page.body if isinstance(n, Header)), None)
        if first_header is not None:
            page.apply_heading(first_header.text)

        for target in extract_nav_links(page.body):
            self.resolver.resolve_nav(page, target)

    def write_page(self, page: Page, template: str, style: str) -> bool:
        """Render pass: render one page into the template and write it."""
        page.rendered = self.renderer.render(page)
        tokens = page_tokens(
            site_title=self.settings.site_title,
            name=page.name,
            style=style,
            nav=render_nav(self.graph, page),
            body=page.rendered,
            link=page.out_name,
            edit=self.resolver.edit_url(page),
            updated=page.updated or self.now,
            now=self.now,
        )
        try:
            self.storage.write_output(page.out_name, substitute(template, tokens))
        except OSError as e:
            self.diagnostics.write_failed(page.out_name, str(e))
            # Not on disk, so not in the feed
            page.rendered = None
            return False
        return True

    def write_feed(self, feed_template: str) -> None:
        s = self.settings
        posts = render_posts(self.graph.pages(), s.site_url, self.now)
        home = self.graph.lookup(s.home_page)
        tokens = feed_tokens(
            site_title=s.site_title,
            name=home.name if home else s.site_title,
            posts=posts,
            now=self.now,
        )
        try:
            self.storage.write_output(s.feed_name, substitute(feed_template, tokens))
        except OSError as e:
            self.diagnostics.write_failed(s.feed_name, str(e))
            return
        logger.info("wrote feed %s", s.feed_name)
