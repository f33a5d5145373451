"""
Configuration Management
Environment-based configuration for database, security, and application settings
"""

from typing import Optional

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings

logger = structlog.get_logger(__name__)


class DatabaseConfig(BaseSettings):
    """Database Configuration - uses service-specific credentials"""

    # Connection settings (individual env vars, or DATABASE_URL as a whole)
    database_url: Optional[str] = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "projecthub"
    db_service_user: str = "projecthub_service"
    db_service_password: str = "projecthub_service_secure_pass_change_me"

    # Pool settings
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_command_timeout: int = 30

    class Config:
        env_prefix = ""
        case_sensitive = False

    def get_database_url(self) -> str:
        """Build database URL from individual settings"""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.db_service_user}:{self.db_service_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    def log_config(self):
        """Log configuration (without sensitive data)"""
        logger.info(
            "Database configuration",
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
            user=self.db_service_user,
            pool_min=self.db_pool_min_size,
            pool_max=self.db_pool_max_size,
        )


class SecurityConfig(BaseSettings):
    """Token signing and password hashing settings"""

    jwt_secret_key: str = "projecthub-dev-secret-change-me-to-a-long-random-value"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 1440
    bcrypt_rounds: int = 12

    class Config:
        env_prefix = ""
        case_sensitive = False

    @field_validator('jwt_access_token_expire_minutes')
    @classmethod
    def validate_expiry(cls, v):
        if v < 1:
            raise ValueError('Token lifetime must be at least 1 minute')
        return v

    @field_validator('bcrypt_rounds')
    @classmethod
    def validate_rounds(cls, v):
        if not 4 <= v <= 31:
            raise ValueError('bcrypt rounds must be between 4 and 31')
        return v

    def log_config(self):
        """Log configuration (without sensitive data)"""
        logger.info(
            "Security configuration",
            algorithm=self.jwt_algorithm,
            token_lifetime_minutes=self.jwt_access_token_expire_minutes,
            bcrypt_rounds=self.bcrypt_rounds,
        )


class AppConfig(BaseSettings):
    """Application Configuration"""

    # Service info
    service_name: str = "projecthub-service"
    service_version: str = "1.0.0"

    # Front-end allowed to call the API
    cors_origin: str = "http://localhost:4200"

    # "postgres" or "memory"
    storage_backend: str = "postgres"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    class Config:
        env_prefix = "APP_"
        case_sensitive = False

    @field_validator('storage_backend')
    @classmethod
    def validate_storage_backend(cls, v):
        v = v.lower()
        if v not in ("postgres", "memory"):
            raise ValueError('Storage backend must be "postgres" or "memory"')
        return v

    def log_config(self):
        """Log configuration"""
        logger.info(
            "Application configuration",
            service=self.service_name,
            version=self.service_version,
            cors_origin=self.cors_origin,
            storage=self.storage_backend,
        )


# Global configuration instances
_db_config: Optional[DatabaseConfig] = None
_security_config: Optional[SecurityConfig] = None
_app_config: Optional[AppConfig] = None


def get_db_config() -> DatabaseConfig:
    """Get database configuration instance"""
    global _db_config
    if _db_config is None:
        _db_config = DatabaseConfig()
    return _db_config


def get_security_config() -> SecurityConfig:
    """Get security configuration instance"""
    global _security_config
    if _security_config is None:
        _security_config = SecurityConfig()
    return _security_config


def get_app_config() -> AppConfig:
    """Get application configuration instance"""
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config
