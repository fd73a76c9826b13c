"""
Configuration for the listing core, selected by environment name.
"""
import os
from typing import Type

from .base import Config, DevelopmentConfig, ProductionConfig, TestingConfig


CONFIG_BY_ENV = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}

# Short names accepted for FLASK_ENV
ENV_ALIASES = {
    'dev': 'development',
    'prod': 'production',
    'test': 'testing',
}


def get_config_class(env: str) -> Type[Config]:
    """
    Resolve an environment name, or one of its short aliases, to a Config class.

    Raises:
        ValueError: If environment is unknown
    """
    name = ENV_ALIASES.get(env.strip().lower(), env.strip().lower())

    try:
        return CONFIG_BY_ENV[name]
    except KeyError:
        raise ValueError(f"Unknown environment: {env}")


def create_config(env: str = None) -> Config:
    """
    Create configuration instance based on environment.

    Args:
        env: Environment name ('development', 'production', 'testing'),
            defaults to FLASK_ENV

    Returns:
        Validated configuration instance

    Raises:
        ValueError: If environment is unknown or a setting is invalid
    """
    if env is None:
        env = os.environ.get('FLASK_ENV', 'development')

    return get_config_class(env)()


__all__ = [
    'Config',
    'DevelopmentConfig',
    'ProductionConfig',
    'TestingConfig',
    'CONFIG_BY_ENV',
    'get_config_class',
    'create_config'
]
