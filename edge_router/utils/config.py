"""
Configuration Management
Environment-based configuration for the edge router
"""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import logging

logger = logging.getLogger(__name__)

DEFAULT_STATIC_ROOT = str(Path(__file__).resolve().parent.parent.parent / "static")


class EdgeRouterConfig(BaseSettings):
    """Edge router configuration"""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False, extra="ignore")

    # Service info
    service_name: str = "edge-router"
    service_version: str = "1.0.0"
    environment: str = "development"
    port: int = 8000

    # Backends, addressed by service name
    api_service_url: str = "http://api-service:5000"
    render_service_url: str = "http://render-service:3000"
    upstream_timeout_seconds: float = 10.0

    # Routing
    api_prefix: str = "/api"
    static_root: str = DEFAULT_STATIC_ROOT

    @field_validator('api_prefix')
    @classmethod
    def validate_api_prefix(cls, v):
        if not v.startswith('/'):
            raise ValueError('API prefix must start with /')
        return v.rstrip('/') or '/'

    @field_validator('upstream_timeout_seconds')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError('Upstream timeout must be positive')
        return v

    def log_config(self):
        """Log configuration"""
        logger.info(f"API prefix {self.api_prefix} -> {self.api_service_url}")
        logger.info(f"Fallback -> {self.render_service_url}")
        logger.info(f"Static root: {self.static_root}")
        logger.info(f"Upstream timeout: {self.upstream_timeout_seconds}s")


_edge_config: Optional[EdgeRouterConfig] = None


def get_edge_config() -> EdgeRouterConfig:
    """Get edge router configuration instance"""
    global _edge_config
    if _edge_config is None:
        _edge_config = EdgeRouterConfig()
    return _edge_config
