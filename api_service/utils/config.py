"""
Configuration Management
Environment-based configuration for the API service
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import logging

logger = logging.getLogger(__name__)


class ApiServiceConfig(BaseSettings):
    """API service configuration"""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False, extra="ignore")

    # Service info
    service_name: str = "api-service"
    service_version: str = "1.0.0"
    environment: str = "development"
    port: int = 5000

    # Route serving the record list
    api_path: str = "/api/"

    # Optional YAML/JSON file overriding the built-in records
    records_file: Optional[str] = None

    @field_validator('api_path')
    @classmethod
    def validate_api_path(cls, v):
        if not v.startswith('/'):
            raise ValueError('API path must start with /')
        return v

    def is_production_mode(self) -> bool:
        return self.environment.lower() == "production"

    def log_config(self):
        """Log configuration"""
        logger.info(f"Records path: {self.api_path}")
        logger.info(f"Records source: {self.records_file or 'built-in'}")
        logger.info(f"Mode: {'Production' if self.is_production_mode() else 'Development'}")


_api_config: Optional[ApiServiceConfig] = None


def get_api_config() -> ApiServiceConfig:
    """Get API service configuration instance"""
    global _api_config
    if _api_config is None:
        _api_config = ApiServiceConfig()
    return _api_config
