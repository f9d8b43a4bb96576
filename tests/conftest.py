"""Test bootstrap for clientmock."""

pytest_plugins = ["clientmock.pytest_plugin"]
