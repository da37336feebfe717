"""Application configuration loaded from environment variables and .env file."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./wasteland.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 월드 콘텐츠 & 세이브
    CONTENT_PATH: str = str(Path(__file__).resolve().parent / "data" / "wasteland.json")
    SAVE_SLOT: str = "falloutAdventureSave"

    # 게임 시계 (표시용, 게임플레이 상태 변경 없음)
    CLOCK_TICK_SECONDS: float = 1.0

    # 전투 난수 시드 (None = 비결정적)
    RNG_SEED: Optional[int] = None


settings = Settings()
