"""Shared pytest fixtures for wirebox tests."""

import pytest

from wirebox.container import Container
from wirebox.reflection import Reflector


@pytest.fixture()
def container() -> Container:
    """Container without entry-point discovery."""
    return Container(discover=False)


@pytest.fixture()
def reflector() -> Reflector:
    """Reflector with the default object-kind policy."""
    return Reflector()
