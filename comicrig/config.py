"""Library configuration from environment variables."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic_settings import BaseSettings

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class Settings(BaseSettings):
    comicrig_env: str = "development"
    comicrig_log_level: str = "info"

    # Dialogue bubbles
    min_font_size: float = 10.0
    max_font_size: float = 24.0
    bubble_margin: float = 8.0  # padding around placed bubbles, px
    bubble_corner_radius: float = 15.0

    # Panels
    panel_margin: float = 2.5  # percent of canvas
    panel_gutter: float = 2.5  # percent of canvas
    panel_corner_radius: float = 12.0
    panel_outline_color: str = "#4a2e2c"
    panel_outline_width: float = 6.0
    font_family: str = "'Comic Neue', 'Comic Sans MS', cursive"

    reading_direction: Literal["ltr", "rtl"] = "ltr"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()


def configure_logging(config: Settings | None = None) -> None:
    """Install the root handler at the configured level."""
    config = config or settings
    logging.basicConfig(
        level=getattr(logging, config.comicrig_log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
