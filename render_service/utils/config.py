"""
Configuration Management
Environment-based configuration for the render service
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import logging

logger = logging.getLogger(__name__)


class RenderServiceConfig(BaseSettings):
    """Render service configuration"""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False, extra="ignore")

    # Service info
    service_name: str = "render-service"
    service_version: str = "1.0.0"
    environment: str = "development"
    port: int = 3000

    # Upstream record source
    api_service_url: str = "http://api-service:5000"
    api_service_path: str = "/api/"
    api_timeout_seconds: float = 5.0

    # Template settings
    templates_dir: Optional[str] = None

    @field_validator('api_timeout_seconds')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError('API timeout must be positive')
        return v

    @field_validator('api_service_path')
    @classmethod
    def validate_api_service_path(cls, v):
        if not v.startswith('/'):
            raise ValueError('API service path must start with /')
        return v

    def is_production_mode(self) -> bool:
        return self.environment.lower() == "production"

    def log_config(self):
        """Log configuration"""
        logger.info(f"Record source: {self.api_service_url}{self.api_service_path}")
        logger.info(f"Upstream timeout: {self.api_timeout_seconds}s")
        logger.info(f"Mode: {'Production' if self.is_production_mode() else 'Development'}")


_render_config: Optional[RenderServiceConfig] = None


def get_render_config() -> RenderServiceConfig:
    """Get render service configuration instance"""
    global _render_config
    if _render_config is None:
        _render_config = RenderServiceConfig()
    return _render_config
