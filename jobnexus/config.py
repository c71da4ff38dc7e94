from pydantic_settings import BaseSettings
from typing import Literal, Optional


class Settings(BaseSettings):
    # App
    app_name: str = "JobNexus"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Storage
    # "memory" keeps everything in process; "sql" uses database_url through SQLAlchemy.
    storage_backend: Literal["memory", "sql"] = "memory"
    database_url: str = "sqlite:///data/jobnexus.db"
    seed_demo_data: bool = False

    # Sessions
    secret_key: str = "dev-secret-key"
    session_cookie: str = "jobnexus_session"
    session_max_age: int = 14 * 24 * 60 * 60
    session_https_only: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
