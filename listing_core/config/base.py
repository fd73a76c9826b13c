"""
Base configuration classes for the listing core.
"""
import os
from typing import Dict, List

from listing_core.security.rate_limiting import RateLimitPolicy, parse_limit, parse_period


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip().lower() for item in os.environ.get(name, default).split(',') if item.strip()]


class Config:
    """Base configuration class."""

    def __init__(self):
        """Initialize configuration with validation."""
        self.validate()

    DEBUG = False
    TESTING = False
    ENV = 'production'

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Rate limiting settings
    RATE_LIMIT_MAX_ATTEMPTS = int(os.environ.get('RATE_LIMIT_MAX_ATTEMPTS', 5))
    RATE_LIMIT_WINDOW_MS = int(os.environ.get('RATE_LIMIT_WINDOW_MS', 60000))
    RATE_LIMIT_MAX_KEYS = int(os.environ.get('RATE_LIMIT_MAX_KEYS', 10000))  # 0 = unbounded

    # Named action limits
    RATE_LIMIT_LOGIN = os.environ.get('RATE_LIMIT_LOGIN', '10/5min')
    RATE_LIMIT_SIGNUP = os.environ.get('RATE_LIMIT_SIGNUP', '5/10min')
    RATE_LIMIT_PROPERTY_FORM = os.environ.get('RATE_LIMIT_PROPERTY_FORM', '10/5min')
    RATE_LIMIT_AI = os.environ.get('RATE_LIMIT_AI', '20/min')

    # How long a key stays blocked after running out of attempts
    RATE_LIMIT_LOGIN_BLOCK = os.environ.get('RATE_LIMIT_LOGIN_BLOCK', '1min')
    RATE_LIMIT_SIGNUP_BLOCK = os.environ.get('RATE_LIMIT_SIGNUP_BLOCK', '2min')
    RATE_LIMIT_PROPERTY_FORM_BLOCK = os.environ.get('RATE_LIMIT_PROPERTY_FORM_BLOCK', '1min')
    RATE_LIMIT_AI_BLOCK = os.environ.get('RATE_LIMIT_AI_BLOCK', '30sec')

    # Upload settings
    UPLOAD_MAX_MB = float(os.environ.get('UPLOAD_MAX_MB', 5))
    UPLOAD_IMAGE_TYPES = _env_list('UPLOAD_IMAGE_TYPES', 'jpg,jpeg,png,webp')

    def validate(self):
        """Validate numeric settings and rate limit strings."""
        if self.RATE_LIMIT_MAX_ATTEMPTS <= 0:
            raise ValueError("RATE_LIMIT_MAX_ATTEMPTS must be positive")

        if self.RATE_LIMIT_WINDOW_MS <= 0:
            raise ValueError("RATE_LIMIT_WINDOW_MS must be positive")

        if self.RATE_LIMIT_MAX_KEYS < 0:
            raise ValueError("RATE_LIMIT_MAX_KEYS cannot be negative")

        if self.UPLOAD_MAX_MB <= 0:
            raise ValueError("UPLOAD_MAX_MB must be positive")

        for name, limit_str in self.get_rate_limit_strings().items():
            try:
                parse_limit(limit_str)
            except ValueError:
                raise ValueError(f"Invalid rate limit for {name}: {limit_str}")

        for name, block_str in self.get_rate_limit_blocks().items():
            if not block_str:
                continue  # wait out the window
            try:
                parse_period(block_str)
            except ValueError:
                raise ValueError(f"Invalid block duration for {name}: {block_str}")

    def get_rate_limit_strings(self) -> Dict[str, str]:
        return {
            'login': self.RATE_LIMIT_LOGIN,
            'signup': self.RATE_LIMIT_SIGNUP,
            'property_form': self.RATE_LIMIT_PROPERTY_FORM,
            'ai': self.RATE_LIMIT_AI,
        }

    def get_rate_limit_blocks(self) -> Dict[str, str]:
        return {
            'login': self.RATE_LIMIT_LOGIN_BLOCK,
            'signup': self.RATE_LIMIT_SIGNUP_BLOCK,
            'property_form': self.RATE_LIMIT_PROPERTY_FORM_BLOCK,
            'ai': self.RATE_LIMIT_AI_BLOCK,
        }

    def get_rate_limit_policies(self) -> Dict[str, RateLimitPolicy]:
        """Named rate limit policies keyed by action name."""
        blocks = self.get_rate_limit_blocks()
        return {
            name: RateLimitPolicy.from_string(name, limit_str, blocks.get(name))
            for name, limit_str in self.get_rate_limit_strings().items()
        }


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    TESTING = False
    ENV = 'development'

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    TESTING = False
    ENV = 'production'

    def validate(self):
        """Production requires a bounded rate limit registry."""
        super().validate()

        if self.RATE_LIMIT_MAX_KEYS == 0:
            raise ValueError("Production requires RATE_LIMIT_MAX_KEYS to be set")


class TestingConfig(Config):
    """Testing configuration."""

    DEBUG = False
    TESTING = True
    ENV = 'testing'

    RATE_LIMIT_MAX_KEYS = 100
