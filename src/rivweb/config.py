"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Build settings loaded from environment variables."""

    source_dir: Path = Path("riv")
    resource_dir: Path = Path("res")
    output_dir: Path = Path("web")

    source_ext: str = ".riv"
    output_ext: str = ".htm"

    stylesheet: str = "style.css"
    page_template: str = "template.htm"
    feed_template: str = "feed.xml"
    feed_name: str = "feed.xml"

    site_title: str = "beton brutalism"
    site_url: str = "https://judah-caruso.github.io"
    repo_url: str = "https://github.com/judah-caruso/judah-caruso.github.io"
    repo_branch: str = "main"
    home_page: str = "index"

    server_host: str = "127.0.0.1"
    server_port: int = 8080
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="RIVWEB_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

