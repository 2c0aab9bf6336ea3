"""
Logging utilities for the record showcase services

Provides centralized logging configuration and utilities.
"""

import os
import copy
import logging
import logging.config
from typing import Optional
import yaml
from pathlib import Path

# Default logging configuration
DEFAULT_LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'detailed': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'json': {
            'format': '{"timestamp": "%(asctime)s", "logger": "%(name)s", "level": "%(levelname)s", "module": "%(module)s", "function": "%(funcName)s", "line": %(lineno)d, "message": "%(message)s"}',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'default',
            'stream': 'ext://sys.stdout'
        }
    },
    'root': {
        'level': 'INFO',
        'handlers': ['console']
    },
    'loggers': {
        'showcase': {
            'level': 'INFO',
            'handlers': ['console'],
            'propagate': False
        }
    }
}


def load_logging_config(config_path: Optional[str] = None) -> dict:
    """
    Load a logging dictConfig from a YAML file, or the defaults

    Args:
        config_path: Path to a YAML logging configuration file

    Returns:
        A dictConfig-compatible dictionary
    """
    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, 'r') as f:
                config = yaml.safe_load(f)
            if config:
                return config
    return copy.deepcopy(DEFAULT_LOGGING_CONFIG)


def setup_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None
) -> None:
    """
    Setup logging configuration

    Args:
        config_path: Path to logging configuration file
        log_level: Override log level
        log_format: Override log format ('default', 'detailed', 'json')
    """
    try:
        config = load_logging_config(config_path)
    except (OSError, yaml.YAMLError) as e:
        logging.getLogger(__name__).warning(f"Failed to load logging config from {config_path}: {e}")
        config = copy.deepcopy(DEFAULT_LOGGING_CONFIG)

    # Apply environment-specific overrides
    environment = os.getenv('ENVIRONMENT', 'development')
    env_config = config.pop(environment, None)
    if isinstance(env_config, dict):
        if 'handlers' in env_config:
            config.setdefault('handlers', {}).update(env_config['handlers'])
        if 'loggers' in env_config:
            config.setdefault('loggers', {}).update(env_config['loggers'])

    # Override log level if specified
    if log_level:
        log_level = log_level.upper()
        for logger_config in config.get('loggers', {}).values():
            logger_config['level'] = log_level
        for handler_config in config.get('handlers', {}).values():
            handler_config['level'] = log_level
        if 'root' in config:
            config['root']['level'] = log_level

    # Override log format if specified
    if log_format and log_format in config.get('formatters', {}):
        for handler_config in config.get('handlers', {}).values():
            handler_config['formatter'] = log_format

    logging.config.dictConfig(config)
    logging.getLogger(__name__).debug(f"Logging configured for environment: {environment}")


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class RequestLogger:
    """Logger for proxied HTTP requests"""

    def __init__(self, name: str = "showcase.requests"):
        self.logger = logging.getLogger(name)

    def log_request(
        self,
        method: str,
        path: str,
        upstream: str,
        status_code: int,
        response_time: float,
        ip_address: Optional[str] = None
    ):
        """Log one routed request"""
        self.logger.info(
            f"{method} {path} -> {upstream} {status_code} {response_time:.3f}s",
            extra={
                'request_method': method,
                'request_path': path,
                'upstream': upstream,
                'response_status': status_code,
                'response_time': response_time,
                'ip_address': ip_address,
                'event_type': 'http_request'
            }
        )


def get_request_logger() -> RequestLogger:
    """Get request logger instance"""
    return RequestLogger()


def init_logging():
    """Initialize logging with environment variables"""
    config_path = os.getenv('LOGGING_CONFIG_PATH')
    log_level = os.getenv('LOG_LEVEL', 'INFO')
    log_format = os.getenv('LOG_FORMAT', 'default')

    setup_logging(config_path, log_level, log_format)
