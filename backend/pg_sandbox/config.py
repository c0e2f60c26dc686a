"""
Configuration settings for the postgres sandbox.
"""
import logging
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    APP_NAME: str = Field(default="pg-sandbox", description="Application name")
    APP_ENV: str = Field(default="dev", description="Environment: dev|staging|prod")
    LOG_LEVEL: str = Field(default="info", description="Log level: info|debug|warning")

    # Kubernetes Configuration
    K8S_NAMESPACE: str = Field(default="default", description="Kubernetes namespace")
    K8S_CONTEXT: Optional[str] = Field(default=None, description="Kubernetes context")
    K8S_IN_CLUSTER: bool = Field(default=False, description="Running in cluster")

    # Postgres workload
    PG_NAME: str = Field(default="postgres", description="Deployment/service name")
    PG_IMAGE: str = Field(default="postgres:9.4", description="Container image")
    PG_IMAGE_PULL_POLICY: str = Field(default="Always", description="Image pull policy")
    PG_REPLICAS: int = Field(default=1, ge=0, description="Desired replicas")
    PG_USER: str = Field(default="kong", description="POSTGRES_USER")
    PG_PASSWORD: str = Field(default="kong", description="POSTGRES_PASSWORD")
    PG_DATABASE: str = Field(default="kong", description="POSTGRES_DB")
    PG_DATA_DIR: str = Field(default="/var/lib/postgresql/data/pgdata", description="PGDATA")
    PG_MOUNT_PATH: str = Field(default="/var/lib/postgresql/data", description="Data volume mount path")
    PG_VOLUME_NAME: str = Field(default="pg-data", description="emptyDir volume name")

    # Postgres networking
    PG_PORT: int = Field(default=5432, description="Container and service port")
    PG_PORT_NAME: str = Field(default="postgres", description="Container port name")
    PG_SERVICE_PORT_NAME: str = Field(default="pgql", description="Service port name")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL (or an explicit level)."""
    name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, name, logging.INFO))


# Global settings instance
settings = Settings()
