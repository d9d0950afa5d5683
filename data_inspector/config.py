"""Configuration and environment settings"""

from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration"""

    # Input limits
    MAX_FILE_SIZE_KB: int = 1024
    LARGE_INPUT_BYTES: int = 100 * 1024  # show processing state above this

    # Chunked processing
    CHUNK_ROW_THRESHOLD: int = 1000
    CHUNK_DELAY_MS: float = 1.0
    CHUNK_SIZE_CATEGORY: str = "medium"

    # Pagination
    EFFICIENT_SLICE_THRESHOLD: int = 10000
    DEFAULT_ROW_LIMIT: int = 50
    ROW_LIMIT_CHOICES: str = "10,25,50,100,500"

    # Performance thresholds
    RENDER_TIME_WARNING_MS: float = 100.0
    RENDER_TIME_CRITICAL_MS: float = 500.0
    ROW_COUNT_CRITICAL: int = 1000
    DATA_SIZE_CRITICAL_BYTES: int = 1024 * 1024
    MAX_METRICS_HISTORY: int = 50

    # Share links
    SHARE_ORIGIN: str = "http://127.0.0.1:7860"
    SHARE_BASE_PATH: str = "/"

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    def get_row_limit_choices(self) -> List[int]:
        """Get the selectable rows-per-page values"""
        return [int(v.strip()) for v in self.ROW_LIMIT_CHOICES.split(",") if v.strip()]


settings = Settings()
