"""
Global pytest configuration and fixtures.
Provides a fresh container per test so registrations never leak between tests.
"""

import pytest

from inject import Inject


def make_logging():
    """Factory for the shared 'logging' service."""
    return {'log': lambda message: message}


@pytest.fixture(scope="function")
def container():
    """Create a container with the 'logging' service registered."""
    ioc = Inject()
    ioc.register({'token': 'logging', 'value': make_logging})
    return ioc


@pytest.fixture(scope="function")
def empty_container():
    """Create a container with nothing registered."""
    return Inject()
