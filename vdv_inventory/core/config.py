# vdv_inventory/core/config.py
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Prefer .env.production if present, else default .env
load_dotenv(".env.production")
load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./vdv_inventory.db"
    sql_echo: bool = False
    log_level: str = "INFO"

    # 🔐 Shared admin password and token signing
    admin_password: str = ""
    jwt_secret: str = "vdv-inventory-dev-secret"  # Replace in production
    jwt_lifetime_seconds: int = 60 * 60 * 24 * 7  # 7 days
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "vdv-inventory:auth"

    auth_cookie_name: str = "auth-token"
    auth_cookie_secure: bool = False

    # QR scan URLs are built as f"{public_base_url}/m/{token}"
    public_base_url: str = "http://localhost:3000"

    encryption_master_key: str = "default-insecure-key-change-in-production"

    cors_origins: List[str] = ["*"]


settings = Settings()
