"""Pytest fixtures for code built on wirebox.

Enable with ``pytest_plugins = ["wirebox.integrations.pytest_plugin"]``.
Override ``wirebox_container`` in your own suite to register providers.
"""

from __future__ import annotations

from collections.abc import Generator, Iterator

import pytest

from wirebox.container import Container
from wirebox.container_context import container_context

_CONTAINER_FIXTURE_NAME = "wirebox_container"


@pytest.fixture()
def wirebox_container() -> Container:
    """Provide a fresh container with provider discovery disabled.

    The test fails if a resolution chain of this container is still open once
    the test body returns.
    """
    return Container(discover=False)


@pytest.fixture()
def wirebox_context(wirebox_container: Container) -> Iterator[Container]:
    """Install ``wirebox_container`` as the shared container for the test."""
    previous = container_context.get_current() if container_context.is_set else None
    container_context.set_current(wirebox_container)
    try:
        yield wirebox_container
    finally:
        container_context.set_current(previous)


@pytest.hookimpl(wrapper=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> Generator[None, object, object]:
    """Fail a test whose body leaves a ``wirebox_container`` resolution open.

    The resolution chain lives in a context variable, so it is inspected right
    after the test body, in the context the body ran in.
    """
    result = yield
    container = pyfuncitem.funcargs.get(_CONTAINER_FIXTURE_NAME)
    if isinstance(container, Container) and container.resolution_stack:
        chain = " -> ".join(type_.__qualname__ for type_ in container.resolution_stack)
        pytest.fail(f"wirebox resolution stack leaked past the test: {chain}", pytrace=False)
    return result
