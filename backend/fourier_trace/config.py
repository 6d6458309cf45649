"""Host configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    fourier_trace_env: str = "development"
    fourier_trace_log_level: str = "info"

    # Asset: URL, file path, or inline SVG markup
    asset_source: str = "samples/fourier_transform.svg"
    fetch_timeout: float = 10.0

    # Headless rendering
    visualizer_id: str = "fourier-transform"
    canvas_width: int = 480
    canvas_height: int = 480
    frame_count: int = 300
    fps: float = 30.0
    output_path: str = "fourier_trace.gif"
    trace_stroke_weight: float = 24.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
