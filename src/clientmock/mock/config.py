"""
clientmock Mock Configuration

Settings for the mock engine, read from the environment when running
under pytest.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

LOG_LEVEL_ENV = 'CLIENTMOCK_LOG_LEVEL'
FAIL_ON_UNUSED_ENV = 'CLIENTMOCK_FAIL_ON_UNUSED'

TRUTHY = ('1', 'true', 'yes', 'on')


@dataclass
class MockConfig:
    """Configuration for mock engine behavior."""

    log_level: str = "warning"
    fail_on_unused: bool = False  # Fail the test at teardown when mocks were never called

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> 'MockConfig':
        """
        Build config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            MockConfig with defaults for unset variables
        """
        env = os.environ if environ is None else environ
        return cls(
            log_level=env.get(LOG_LEVEL_ENV, cls.log_level),
            fail_on_unused=env.get(FAIL_ON_UNUSED_ENV, '').strip().lower() in TRUTHY
        )


def configure_logging(level: str = "warning") -> logging.Logger:
    """Set the level of the ``clientmock`` logger hierarchy."""
    logger = logging.getLogger("clientmock")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    return logger
