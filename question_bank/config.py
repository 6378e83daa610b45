from pydantic_settings import BaseSettings
from pydantic import SecretStr
from typing import List
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    app_name: str = "Banco de Questões API"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Local store (one JSON document per key)
    storage_path: str = os.getenv("STORAGE_PATH", "data")

    # Remote user directory used for login
    users_endpoint: str = os.getenv("USERS_ENDPOINT", "https://bancodequestoes-api.onrender.com/users")
    users_endpoint_timeout: float = float(os.getenv("USERS_ENDPOINT_TIMEOUT", 10))

    # JWT Configuration
    jwt_secret: SecretStr = os.getenv("JWT_SECRET", "your-fallback-secret-key")
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(os.getenv("JWT_EXPIRE_MINUTES", 60 * 12))

    # Locale used for dates shown to users and in CSV exports
    timezone: str = os.getenv("TIMEZONE", "America/Sao_Paulo")
    date_format: str = os.getenv("DATE_FORMAT", "%d/%m/%Y")

    # Statement image uploads
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", 5 * 1024 * 1024))

    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

settings = Settings()
