"""Application configuration using pydantic-settings."""

from functools import cached_property, lru_cache
from pathlib import Path
from typing import Self

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CERTIFICATE_FILENAME = "Certificado_MasterClass.pdf"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # JSON array of {"email", "name", "accessKey"} objects.
    # Relative paths resolve against the working directory.
    roster_path: str = "data/participantes.json"

    # Suggested download name sent in Content-Disposition
    certificate_filename: str = DEFAULT_CERTIFICATE_FILENAME

    # Comma-separated list of allowed CORS origins (in addition to frontend_url)
    # Example: "https://masterclass.example.com,https://staging.example.com"
    cors_allowed_origins: str = ""

    # Origin of the page hosting the certificate request form
    frontend_url: str = ""

    debug: bool = False
    enable_docs: bool = False  # Swagger UI at /docs

    @model_validator(mode="after")
    def validate_config(self) -> Self:
        if not self.roster_path.strip():
            raise ValueError("ROSTER_PATH must point to the participant roster file.")

        filename = self.certificate_filename
        if not filename.lower().endswith(".pdf"):
            raise ValueError("CERTIFICATE_FILENAME must end with .pdf")
        if any(ch in filename for ch in ('"', "/", "\\")):
            raise ValueError(
                "CERTIFICATE_FILENAME must not contain quotes or path separators."
            )
        return self

    @cached_property
    def roster_file(self) -> Path:
        return Path(self.roster_path).expanduser()

    @cached_property
    def allowed_origins(self) -> list[str]:
        """Combines frontend_url and cors_allowed_origins, without duplicates."""
        origins: list[str] = []

        if self.frontend_url:
            origins.append(self.frontend_url)

        if self.cors_allowed_origins:
            for origin in self.cors_allowed_origins.split(","):
                origin = origin.strip()
                if origin and origin not in origins:
                    origins.append(origin)

        return origins


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this in tests to reset settings between test cases.
    After clearing, the next get_settings() call will create
    a fresh Settings instance with current environment variables.

    Example:
        def test_something(monkeypatch):
            monkeypatch.setenv("ROSTER_PATH", "/tmp/roster.json")
            clear_settings_cache()
            settings = get_settings()  # Fresh instance
    """
    get_settings.cache_clear()
