# /screenlapse/config.py
import sys
from pathlib import Path
from functools import lru_cache
from typing import ClassVar, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from loguru import logger
from tqdm import tqdm


class AppConfig(BaseSettings):
    # Generic
    APP_NAME: ClassVar[str] = "screenlapse"

    # Capture discovery
    BASE_DIR: Optional[Path] = None
    IMAGE_EXTENSION: str = ".png"

    # Encoder
    FFMPEG_EXE: Optional[str] = None
    OUTPUT_DIR: Optional[Path] = None
    DEFAULT_FRAMERATE: str = "5"

    # Video Constants
    VIDEO_WIDTH: ClassVar[int] = 1920
    VIDEO_HEIGHT: ClassVar[int] = 1080
    VIDEO_FPS: ClassVar[int] = 60
    VIDEO_CODEC: ClassVar[str] = "libx264"
    PIXEL_FORMAT: ClassVar[str] = "yuv422p"
    VIDEO_EXTENSION: ClassVar[str] = ".mp4"

    # Other
    LOG_LEVEL: str = "INFO"
    PAUSE_ON_EXIT: bool = True

    model_config = SettingsConfigDict(
        env_prefix="SCREENLAPSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def resolve_base_dir(self) -> Path:
        """Screenshot root, defaulting to the RuneLite screenshots folder in the user's home."""
        if self.BASE_DIR is not None:
            return self.BASE_DIR
        return Path.home() / ".runelite" / "screenshots"


@lru_cache()
def get_app_config() -> AppConfig:
    return AppConfig()


def _tqdm_sink(message) -> None:
    tqdm.write(str(message), end="", file=sys.stderr)


_handler_id: Optional[int] = None


def configure_logging(level: str = "INFO") -> None:
    """(Re)install the console handler. Only the handler added here is replaced."""
    global _handler_id
    if _handler_id is None:
        logger.remove()
    else:
        logger.remove(_handler_id)
    _handler_id = logger.add(
        _tqdm_sink,
        level=level,
        colorize=True,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
    )


# Logger
configure_logging(get_app_config().LOG_LEVEL)
