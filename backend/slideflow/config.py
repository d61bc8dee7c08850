from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Canvas
    canvas_width: int = 1080
    canvas_height: int = 1440
    margin: int = 40
    content_padding: int = 40  # inset applied to a template content region

    # Wrap-flow layout defaults (carousel-friendly minimums)
    clearance_px: float = 1
    headline_font_size: float = 76
    body_font_size: float = 48
    headline_min_font_size: float = 56
    body_min_font_size: float = 36
    headline_line_height: float = 1.15
    body_line_height: float = 1.25
    font_step: float = 2
    block_gap_px: float = 24
    lane_tie_break: str = "right"
    body_prefer_side_lane: bool = True
    min_usable_lane_width_px: float = 300
    skinny_lane_width_px: float = 380
    min_below_space_px: float = 240
    avg_char_width_em: float = 0.56

    # Assets
    font_path: str = "assets/fonts/Montserrat/Montserrat-Regular.ttf"
    bold_font_path: str = "assets/fonts/Montserrat/Montserrat-Bold.ttf"

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
