"""
Base configuration for the star navigator.

Uses Pydantic Settings for environment-based configuration.
The gateway extends BaseNavigatorSettings with its own prefix.
"""

from pydantic_settings import BaseSettings


class BaseNavigatorSettings(BaseSettings):
    """Settings shared by the navigation engine and the HTTP gateway."""

    # Graph document: file path or http(s) URL. Uploads overwrite it (file paths only).
    graph_source: str = "data/graph.yaml"
    load_timeout_seconds: float = 10.0

    # Viewport, in pixels
    viewport_width: int = 1024
    viewport_height: int = 768
    viewport_margin: int = 120

    # Camera ratio bounds (graph units per pixel)
    min_ratio: float = 0.2
    max_ratio: float = 2.5

    # Star layout radius, in graph units
    star_radius: float = 250.0

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "NAVIGATOR_"
        extra = "ignore"
