"""
Validation core wired to a configuration.
"""
import logging
from typing import Optional

from listing_core.config import Config, create_config
from listing_core.security.rate_limiting import RateLimiter, RateLimitResult
from listing_core.validation.formats import validate_file_size, validate_file_type


logger = logging.getLogger(__name__)


def setup_logging(config: Config):
    if not config.TESTING:
        logging.basicConfig(
            level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )


class ValidationCore:
    """
    Owns the rate limiter and the configured defaults.

    Hosting applications create one instance and share it, instead of
    relying on the process-wide limiter.
    """

    def __init__(self, config: Optional[Config] = None, limiter: Optional[RateLimiter] = None):
        self.config = config or create_config()
        self.policies = self.config.get_rate_limit_policies()

        if limiter is None:
            limiter = RateLimiter(max_keys=self.config.RATE_LIMIT_MAX_KEYS, policies=self.policies)
        else:
            limiter.policies.update(self.policies)
        self.limiter = limiter

        logger.info(f"ValidationCore initialized for {self.config.ENV}")

    def check_rate_limit(self, key: str, max_attempts: Optional[int] = None,
                         window_ms: Optional[int] = None) -> bool:
        if max_attempts is None:
            max_attempts = self.config.RATE_LIMIT_MAX_ATTEMPTS
        if window_ms is None:
            window_ms = self.config.RATE_LIMIT_WINDOW_MS
        return self.limiter.check(key, max_attempts, window_ms)

    def get_rate_limit_reset(self, key: str) -> int:
        return self.limiter.get_reset(key)

    def check_action(self, policy: str, key: str, action_name: Optional[str] = None) -> RateLimitResult:
        return self.limiter.check_action(policy, key, action_name)

    def hit(self, policy: str, key: str, action_name: Optional[str] = None):
        self.limiter.hit(policy, key, action_name)

    def validate_upload(self, filename: str, size: int) -> bool:
        """Check an image upload against the configured types and size."""
        return (
            validate_file_type(filename, self.config.UPLOAD_IMAGE_TYPES) and
            validate_file_size(size, self.config.UPLOAD_MAX_MB)
        )


def create_core(env: str = None) -> ValidationCore:
    """Create a configured ValidationCore and set up logging."""
    config = create_config(env)
    setup_logging(config)
    return ValidationCore(config)
