"""
Pytest configuration for the record showcase services
"""

import os

# Services skip logging setup at import under the testing environment
os.environ.setdefault("ENVIRONMENT", "testing")


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )
