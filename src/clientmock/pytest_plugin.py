"""
clientmock pytest plugin providing the ``client_mock`` fixture.

Enable it from a conftest.py:
    pytest_plugins = ["clientmock.pytest_plugin"]
"""

from typing import Iterator

import pytest

from .client.configs import configs
from .mock.config import MockConfig, configure_logging
from .mock.registry import MockRegistry


@pytest.fixture
def client_mock_config() -> MockConfig:
    """Settings for the ``client_mock`` fixture, read from the environment."""
    return MockConfig.from_env()


@pytest.fixture
def client_mock(client_mock_config: MockConfig) -> Iterator[MockRegistry]:
    """
    Registry installed on the process-wide client configuration.

    The original gateway is restored on teardown, even when the test fails.
    """
    configure_logging(client_mock_config.log_level)
    registry = MockRegistry(configs)

    with registry.installed():
        yield registry
        unused = registry.unused_mocks()

    if client_mock_config.fail_on_unused and unused:
        pytest.fail(f"[clientmock] {unused} mock(s) registered but never called")
