"""Application configuration using Pydantic Settings"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    environment: str = "development"
    service_name: str = "taskflow-api"
    api_host: str = "0.0.0.0"
    api_port: int = 5000

    # Database
    database_url: Optional[str] = None
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Security
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    jwt_expiration_days: int = 7
    bcrypt_rounds: int = 12

    # CORS
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def missing_required(self) -> list[str]:
        """Names of required environment variables that are not set"""
        required = {"DATABASE_URL": self.database_url, "JWT_SECRET": self.jwt_secret}
        return [name for name, value in required.items() if not value]


# Global settings instance
settings = Settings()
