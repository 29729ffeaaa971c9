from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ErrorPolicy(str, Enum):
    FAIL_FAST = "fail-fast"        # 첫 오류에서 중단
    BEST_EFFORT = "best-effort"    # 실패한 블록만 건너뛰고 나머지 반환


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    error_policy: ErrorPolicy = Field(default=ErrorPolicy.FAIL_FAST, alias="CONTROLLER_PARSER_ERROR_POLICY")
    output_dir: Path = Field(default=Path("./out"), alias="CONTROLLER_PARSER_OUTPUT_DIR")
    log_level: str = Field(default="WARNING", alias="CONTROLLER_PARSER_LOG_LEVEL")

settings = Settings()
