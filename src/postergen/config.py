"""Configuration loading and validation."""

import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_CONFIG_NAME = "config.toml"


class SpotifyConfig(BaseModel):
    """Spotify Web API client credentials."""

    client_id: str
    client_secret: str
    market: str = "US"
    """Market used for new releases and album lookups."""

    timeout: float = Field(default=15.0, gt=0)
    """Timeout in seconds for every catalog request."""


class Config(BaseModel):
    """Root configuration (minimal - just catalog credentials)."""

    spotify: SpotifyConfig


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from TOML file.

    When no path is given and ./config.toml does not exist, the credentials
    are read from SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET.

    Args:
        config_path: Path to config file. If None, looks for config.toml in current directory.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME

    if not config_path.exists():
        client_id = os.environ.get("SPOTIFY_CLIENT_ID")
        client_secret = os.environ.get("SPOTIFY_CLIENT_SECRET")
        if not explicit and client_id and client_secret:
            return Config(spotify=SpotifyConfig(client_id=client_id, client_secret=client_secret))
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Copy config.toml.example to config.toml and add your credentials."
        )

    with open(config_path, "rb") as f:
        config_dict = tomllib.load(f)

    return Config(**config_dict)


def format_output_name(
    template: str, poster_type: str, page_size: str, dpi: int | None = None
) -> str:
    """
    Format output filename using template.

    Args:
        template: Template string with {type}, {size} and {dpi} placeholders.
        poster_type: Poster type name (album, movie).
        page_size: Page size name (a0..a4).
        dpi: Optional raster resolution.

    Returns:
        Formatted filename.
    """
    return template.format(
        type=poster_type,
        size=page_size.lower(),
        dpi=dpi if dpi is not None else "",
    )
