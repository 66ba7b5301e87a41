# Filename: fileshare/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path
from typing import Literal


class Settings(BaseSettings):
    # Core
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    app_name: str = "FileShare"
    app_version: str = "0.1.0"
    port: int = 8080

    secret_key: str = Field(..., description="JWT secret key - required")
    access_token_expire_minutes: int = 1440
    jwt_algorithm: str = "HS256"

    # single administrator, password only (no user accounts)
    manage_password: str = "123456"

    database_url: str = Field("sqlite:///./config/fileshare.db", description="Database connection string")

    filestore_path: Path = Path("./static")
    # allow creating link-type directories and linking external files
    link_dir_add: bool = True

    context_manage_path: str = "/fileshare/manage"
    context_share_path: str = "/fileshare"

    cors_allow_origins: str = "*"
    cors_allow_credentials: bool = True
    cors_allow_methods: str = "GET,POST,PUT,PATCH,DELETE,OPTIONS"
    cors_allow_headers: str = "Origin,Content-Type,Accept,Authorization"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_path: Path = Path("./recode.log")

    model_config = SettingsConfigDict(
        env_prefix="FILESHARE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
