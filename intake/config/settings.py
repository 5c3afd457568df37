from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "intake"
    db_username: str = "intake"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    storage_disk: str = "local"
    files_root: Path = Path("/var/lib/intake/files")

    allow_uncategorized: bool = False

    # Owner identity for the environment-backed auth provider; empty means unauthenticated.
    intake_owner_id: str = ""
