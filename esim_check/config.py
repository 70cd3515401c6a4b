"""Application configuration loaded from environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Central configuration — reads from environment / .env file."""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: str = "*"
    log_level: str = "INFO"

    # Frontend
    public_dir: Path = PACKAGE_ROOT / "public"

    # Phone catalog provider
    catalog_base_url: str = "https://gsmarena-api.example.com/api"
    catalog_timeout_seconds: int = 30

    # Upstream protection
    min_interval_seconds: float = 5.0        # between upstream-bound requests
    upstream_cooldown_seconds: float = 30.0  # after a provider 429

    search_result_limit: int = 8

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def cors_origins(self) -> list[str]:
        if self.allowed_origins == "*":
            return ["*"]
        return [o.strip() for o in self.allowed_origins.split(",")]


settings = Settings()
