# grislo/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]
PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    database_url: str = "sqlite:///./grislo.db"
    redis_url: str = "redis://localhost:6379/0"

    # Directory with config.json / schedule.json / pickupLocations.json
    seed_dir: Path = PACKAGE_DIR / "data"

    # Off → the chain runs local-only (cache + seed)
    remote_enabled: bool = True

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_prefix="GRISLO_",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
