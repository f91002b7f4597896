from __future__ import annotations

import itertools
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, ClassVar

from wirebox.exceptions import WireboxCircularDependencyError


class ResolutionStack:
    """Track the chain of types currently being resolved.

    The chain is an immutable tuple stored in a context variable owned by this
    stack, so every thread and every asyncio task sees its own chain and
    independent top-level resolutions never interleave. Entering a frame
    publishes a new tuple; leaving it resets the variable to the previous
    tuple, on success and on failure alike.
    """

    _ids: ClassVar[itertools.count[int]] = itertools.count()

    def __init__(self) -> None:
        self._chain: ContextVar[tuple[Any, ...]] = ContextVar(
            f"wirebox_resolution_stack_{next(self._ids)}",
            default=(),
        )

    @property
    def chain(self) -> tuple[Any, ...]:
        """Types being resolved on the current call path, outermost first."""
        return self._chain.get()

    @property
    def is_idle(self) -> bool:
        return not self._chain.get()

    def __contains__(self, key: object) -> bool:
        return key in self._chain.get()

    def __len__(self) -> int:
        return len(self._chain.get())

    @contextmanager
    def frame(self, key: Any) -> Iterator[None]:
        """Hold ``key`` on the stack for the duration of the ``with`` block.

        Args:
            key: Type about to be resolved.

        Raises:
            WireboxCircularDependencyError: If ``key`` is already on the stack.
                Nothing is pushed in that case.

        """
        chain = self._chain.get()
        if key in chain:
            raise WireboxCircularDependencyError((*chain, key))
        token = self._chain.set((*chain, key))
        try:
            yield
        finally:
            self._chain.reset(token)


__all__ = ["ResolutionStack"]
