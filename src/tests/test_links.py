"""Unit tests for link resolution."""

from rivweb.core.models import ExternalLink, InternalLink


# ============================================================
# Internal links
# ============================================================


class TestResolveInternal:
    def test_existing_page_link(self, graph, resolver):
        source = graph.lookup("index")
        html = resolver.resolve(source, InternalLink(target="about"))
        assert html == '<a class="internal link" href="about.htm">About</a>'

    def test_link_points_at_target_not_source(self, graph, resolver):
        source = graph.lookup("index")
        html = resolver.resolve(source, InternalLink(target="notes"))
        assert 'href="notes.htm"' in html
        assert "index.htm" not in html

    def test_increments_ref_count_per_occurrence(self, graph, resolver):
        source = graph.lookup("index")
        for _ in range(3):
            resolver.resolve(source, InternalLink(target="about"))
        assert graph.lookup("about").ref_count == 3
        assert graph.lookup("notes").ref_count == 0

    def test_display_text_priority(self, graph, resolver):
        source = graph.lookup("index")
        target = graph.lookup("about")

        assert ">About</a>" in resolver.resolve(source, InternalLink(target="about"))

        target.title = "All About Me"
        assert ">All About Me</a>" in resolver.resolve(source, InternalLink(target="about"))

        html = resolver.resolve(source, InternalLink(value="click", target="about"))
        assert ">click</a>" in html

    def test_broken_link(self, graph, resolver, diagnostics):
        source = graph.lookup("index")
        html = resolver.resolve(source, InternalLink(target="draft-page"))
        assert 'class="broken external link"' in html
        assert 'href="https://git.example.org/me/site/new/main/riv?filename=draft-page.riv"' in html
        assert 'target="_blank"' in html
        assert ">draft-page</a>" in html

        [entry] = diagnostics.entries
        assert entry.kind == "broken-link"
        assert entry.page == "index.riv"
        assert entry.detail == "draft-page"

    def test_self_link_renders_but_does_not_count(self, graph, resolver):
        about = graph.lookup("about")
        html = resolver.resolve(about, InternalLink(target="about"))
        assert html == '<a class="internal link" href="about.htm">About</a>'
        assert about.ref_count == 0

    def test_broken_link_keeps_explicit_text(self, graph, resolver):
        html = resolver.resolve(graph.lookup("index"), InternalLink(value="soon", target="x"))
        assert ">soon</a>" in html

    def test_broken_link_does_not_count(self, graph, resolver):
        resolver.resolve(graph.lookup("index"), InternalLink(target="x"))
        assert all(p.ref_count == 0 for p in graph)


class TestExternal:
    def test_external_link(self, resolver):
        html = resolver.external(ExternalLink(value="Example", target="https://example.com"))
        assert html == (
            '<a class="external link" href="https://example.com" target="_blank">Example</a>'
        )

    def test_external_link_defaults_to_url(self, resolver):
        html = resolver.external(ExternalLink(target="https://example.com/a"))
        assert ">https://example.com/a</a>" in html


class TestUrls:
    def test_edit_url(self, graph, resolver, settings):
        url = resolver.edit_url(graph.lookup("about"))
        assert url.startswith("https://git.example.org/me/site/edit/main/")
        assert url.endswith("/about.riv")

    def test_new_file_url(self, resolver):
        url = resolver.new_file_url("new-page")
        assert url.startswith("https://git.example.org/me/site/new/main/")
        assert url.endswith("?filename=new-page.riv")


# ============================================================
# Navigation references
# ============================================================


class TestResolveNav:
    def test_adds_target(self, graph, resolver):
        index = graph.lookup("index")
        resolver.resolve_nav(index, "about")
        assert index.nav == ["about"]

    def test_no_duplicates(self, graph, resolver):
        index = graph.lookup("index")
        for _ in range(3):
            resolver.resolve_nav(index, "about")
        assert index.nav == ["about"]

    def test_never_self(self, graph, resolver):
        index = graph.lookup("index")
        resolver.resolve_nav(index, "index")
        assert index.nav == []

    def test_does_not_count_references(self, graph, resolver):
        resolver.resolve_nav(graph.lookup("index"), "about")
        assert graph.lookup("about").ref_count == 0

    def test_broken_nav_is_dropped_and_reported(self, graph, resolver, diagnostics):
        index = graph.lookup("index")
        resolver.resolve_nav(index, "ghost")
        assert index.nav == []
        [entry] = diagnostics.of_kind("broken-nav")
        assert entry.page == "index.riv"
        assert entry.detail == "ghost"

    def test_mutual_nav(self, graph, resolver):
        index, about = graph.lookup("index"), graph.lookup("about")
        for _ in range(2):
            resolver.resolve_nav(index, "about")
            resolver.resolve_nav(about, "index")
        assert index.nav == ["about"]
        assert about.nav == ["index"]
