"""
Application configuration management using Pydantic Settings.

This module centralizes all environment-based configuration for the service,
providing type-safe access to configuration values with validation. The same
build runs in every environment (local, dev, staging, production); only the
environment variables injected by the deployment differ.
"""

import os
from typing import Dict, Any, List, Optional
from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url
from functools import lru_cache
import logging

logger = logging.getLogger('CORE_CONFIG')

DEFAULT_SQLITE_URL = "sqlite:///./user_service.db"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Name of the service
        environment: Environment tag (local, dev, staging, production)
        app_version: Service version
        app_description: Human readable description
        build_version / build_date / build_revision: CI build metadata

        # Database Configuration
        database_url: Complete database URL (if provided directly)
        db_username / db_password / db_host / db_port / db_name:
            PostgreSQL parts used when database_url is not set

        # Connection Pool Settings
        db_pool_size: Database connection pool size
        db_max_overflow: Maximum overflow connections
        db_pool_timeout: Pool checkout timeout in seconds
        db_pool_recycle: Connection recycle time in seconds

        # Feature flags, monitoring and security
        feature_*: Feature toggles reported by /config and /health
        monitoring_*: Metrics endpoint settings
        cors_* / jwt_*: Security settings (secrets are never exposed)
    """

    # Application Settings
    app_name: str = "user-service"
    environment: str = "local"
    app_version: str = "1.0.0"
    app_description: str = "Multi-environment user management service"
    log_level: str = "INFO"

    # Build metadata (injected by CI)
    build_version: str = "unknown"
    build_date: str = "unknown"
    build_revision: str = "unknown"

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8080

    # Database Configuration
    database_url: Optional[str] = None
    db_username: str = "postgres"
    db_password: Optional[str] = None
    db_host: Optional[str] = None
    db_port: str = "5432"
    db_name: Optional[str] = None
    seed_data: bool = False

    # Connection Pool Settings
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_timeout: int = 20
    db_pool_recycle: int = 1800
    db_pool_pre_ping: bool = True
    db_echo: bool = False

    # Feature flags
    feature_cache_enabled: bool = False
    feature_metrics_enabled: bool = True
    feature_audit_enabled: bool = False
    feature_debug_mode: bool = False

    # Monitoring
    monitoring_enabled: bool = True
    monitoring_metrics_port: int = 8080
    monitoring_metrics_path: str = "/metrics"
    monitoring_health_check_interval: int = 30

    # Security
    cors_enabled: bool = True
    cors_allowed_origins: str = "http://localhost:3000,http://localhost:8080"
    jwt_secret: Optional[str] = None
    jwt_expiration_ms: int = 86400000

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    def get_allowed_origins(self) -> List[str]:
        """Split the comma separated CORS origin list."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    def get_database_url(self) -> str:
        """
        Construct the database URL from components or return direct URL.

        Falls back to a local SQLite file when neither DATABASE_URL nor
        DB_HOST is configured.

        Returns:
            str: SQLAlchemy database URL

        Raises:
            ValueError: If DB_HOST is set but the rest of the configuration is incomplete
        """
        if self.database_url:
            return self.database_url

        if not self.db_host:
            return DEFAULT_SQLITE_URL

        missing = []
        if not self.db_username:
            missing.append("DB_USERNAME")
        if not self.db_password:
            missing.append("DB_PASSWORD")
        if not self.db_name:
            missing.append("DB_NAME")

        if missing:
            raise ValueError(f"Database configuration incomplete. Missing: {', '.join(missing)}")

        return f"postgresql://{self.db_username}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    def get_masked_database_url(self) -> str:
        """Database URL safe for logs (password replaced with ***)."""
        return make_url(self.get_database_url()).render_as_string(hide_password=True)

    def features(self) -> Dict[str, bool]:
        return {
            "cacheEnabled": self.feature_cache_enabled,
            "metricsEnabled": self.feature_metrics_enabled,
            "auditEnabled": self.feature_audit_enabled,
            "debugMode": self.feature_debug_mode,
        }

    def monitoring(self) -> Dict[str, Any]:
        return {
            "enabled": self.monitoring_enabled,
            "metricsPort": self.monitoring_metrics_port,
            "metricsPath": self.monitoring_metrics_path,
            "healthCheckInterval": self.monitoring_health_check_interval,
        }

    def database(self) -> Dict[str, Any]:
        """Database settings without the password."""
        url = make_url(self.get_database_url())
        return {
            "driver": url.drivername,
            "host": url.host,
            "port": url.port,
            "name": url.database,
            "username": url.username,
            "maxPoolSize": self.db_pool_size + self.db_max_overflow,
            "showSql": self.db_echo,
        }

    def security(self) -> Dict[str, Any]:
        """Security settings without the JWT secret."""
        return {
            "corsEnabled": self.cors_enabled,
            "allowedOrigins": self.get_allowed_origins(),
            "jwtExpirationMs": self.jwt_expiration_ms,
            "jwtSecretConfigured": bool(self.jwt_secret),
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Cached settings object
    """
    settings = Settings()
    logger.debug(f"Loaded settings for environment '{settings.environment}' (pid {os.getpid()})")
    return settings
