from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


# ----------------------------
# General / App settings
# ----------------------------
class AppSettings(BaseSettings):
    app_name: str = "UsersWebApi"
    debug: bool = False

    # Logger
    log_file: str = "webapi.log"
    log_level: str = "INFO"


# ----------------------------
# Pagination settings
# ----------------------------
class PaginationSettings(BaseSettings):
    default_page_number: int = Field(default=1, ge=1)
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=20, ge=1)

    def clamp_page_size(self, page_size: int) -> int:
        return max(1, min(page_size, self.max_page_size))

    def clamp_page_number(self, page_number: int) -> int:
        return max(1, page_number)


# ----------------------------
# Top-level settings
# ----------------------------
class Settings(BaseSettings):
    app: AppSettings = AppSettings()
    pagination: PaginationSettings = PaginationSettings()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )
