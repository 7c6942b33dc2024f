from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_base_url: str = "http://localhost:5000/api"
    request_timeout_seconds: int = 30

    max_upload_size_bytes: int = 10 * 1024 * 1024
    allowed_upload_mime_types: list[str] = [
        "image/jpeg",
        "image/png",
        "image/jpg",
        "application/pdf",
    ]
    upload_progress_step: int = 20
    upload_progress_interval_seconds: float = 0.1

    page_size_options: list[int] = [5, 10, 25]
    default_page_size: int = 10
    search_debounce_seconds: float = 0.0

    login_path: str = "/login"
    authenticated_home_path: str = "/dashboard"
    token_file: str = "~/.ocr_client/token"
    min_password_length: int = 6

    @model_validator(mode="after")
    def _check_default_page_size(self) -> "Settings":
        if self.default_page_size not in self.page_size_options:
            raise ValueError(
                f"default_page_size {self.default_page_size} is not one of "
                f"{self.page_size_options}"
            )
        return self
