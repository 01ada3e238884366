"""Unit tests for FileStorage."""

import pytest

from rivweb.core.errors import FatalBuildError
from rivweb.core.storage import FileStorage


@pytest.fixture
def storage(settings):
    return FileStorage(settings)


class TestScan:
    def test_lists_sources_sorted(self, storage, site):
        for name in ("zeta.riv", "alpha.riv", "notes.txt"):
            (site / name).write_text("")
        (site / "folder.riv").mkdir()
        assert storage.scan() == ["alpha.riv", "zeta.riv"]

    def test_missing_source_dir_is_fatal(self, storage):
        with pytest.raises(FatalBuildError) as exc:
            storage.scan()
        assert exc.value.code == FatalBuildError.SOURCE_DIR


class TestResources:
    def test_read_resource(self, storage, site, settings):
        assert storage.read_resource("style.css", FatalBuildError.STYLESHEET).startswith("body")

    def test_missing_resource_is_fatal_with_code(self, storage, site):
        with pytest.raises(FatalBuildError) as exc:
            storage.read_resource("nope.htm", FatalBuildError.PAGE_TEMPLATE)
        assert exc.value.code == FatalBuildError.PAGE_TEMPLATE


class TestSources:
    def test_read_source_and_mtime(self, storage, site):
        (site / "a.riv").write_text("= A\n", encoding="utf-8")
        assert storage.read_source("a.riv") == "= A\n"
        assert storage.source_mtime("a.riv").tzinfo is not None

    def test_read_missing_source_raises_oserror(self, storage, site):
        with pytest.raises(OSError):
            storage.read_source("gone.riv")


class TestOutput:
    def test_ensure_output_dir_creates_parents(self, storage, settings):
        storage.output_dir = settings.output_dir / "nested" / "deeper"
        storage.ensure_output_dir()
        assert storage.output_dir.is_dir()

    def test_ensure_output_dir_fails_on_file(self, storage, settings):
        settings.output_dir.parent.mkdir(parents=True, exist_ok=True)
        settings.output_dir.write_text("not a directory")
        with pytest.raises(FatalBuildError) as exc:
            storage.ensure_output_dir()
        assert exc.value.code == FatalBuildError.OUTPUT_DIR

    def test_write_output(self, storage, settings):
        storage.ensure_output_dir()
        path = storage.write_output("a.htm", "<p>x</p>")
        assert path == settings.output_dir / "a.htm"
        assert path.read_text() == "<p>x</p>"
