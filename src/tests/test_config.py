"""Unit tests for application configuration."""

from pathlib import Path
from unittest.mock import patch

from rivweb.config import Settings


class TestSettings:
    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            s = Settings(_env_file=None)
            assert s.source_dir == Path("riv")
            assert s.resource_dir == Path("res")
            assert s.output_dir == Path("web")
            assert s.source_ext == ".riv"
            assert s.output_ext == ".htm"
            assert s.home_page == "index"
            assert s.server_port == 8080
            assert s.debug is False

    def test_from_env(self):
        env = {
            "RIVWEB_SOURCE_DIR": "/tmp/pages",
            "RIVWEB_OUTPUT_DIR": "/tmp/out",
            "RIVWEB_SITE_TITLE": "My Site",
            "RIVWEB_SERVER_PORT": "9000",
            "RIVWEB_DEBUG": "true",
        }
        with patch.dict("os.environ", env, clear=True):
            s = Settings(_env_file=None)
            assert s.source_dir == Path("/tmp/pages")
            assert s.output_dir == Path("/tmp/out")
            assert s.site_title == "My Site"
            assert s.server_port == 9000
            assert s.debug is True

    def test_debug_false_values(self):
        with patch.dict("os.environ", {"RIVWEB_DEBUG": "false"}, clear=True):
            s = Settings(_env_file=None)
            assert s.debug is False

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("RIVWEB_HOME_PAGE=start\n")
        with patch.dict("os.environ", {}, clear=True):
            s = Settings(_env_file=env_file)
            assert s.home_page == "start"
