from __future__ import annotations

import threading

import pytest

from wirebox.exceptions import WireboxCircularDependencyError
from wirebox.resolution_stack import ResolutionStack


class _A:
    pass


class _B:
    pass


def test_frame_pushes_and_pops() -> None:
    stack = ResolutionStack()

    assert stack.is_idle
    with stack.frame(_A):
        assert stack.chain == (_A,)
        with stack.frame(_B):
            assert stack.chain == (_A, _B)
            assert _B in stack
            assert len(stack) == 2
        assert stack.chain == (_A,)
    assert stack.is_idle


def test_frame_pops_on_error() -> None:
    stack = ResolutionStack()

    with pytest.raises(RuntimeError), stack.frame(_A), stack.frame(_B):
        raise RuntimeError

    assert stack.chain == ()


def test_duplicate_key_raises_without_pushing() -> None:
    stack = ResolutionStack()

    with stack.frame(_A), stack.frame(_B):
        with pytest.raises(WireboxCircularDependencyError) as exc_info, stack.frame(_A):
            pass
        assert stack.chain == (_A, _B)

    assert exc_info.value.chain == (_A, _B, _A)


def test_stacks_are_independent() -> None:
    first = ResolutionStack()
    second = ResolutionStack()

    with first.frame(_A):
        assert second.is_idle
        with second.frame(_A):
            assert first.chain == (_A,)


def test_chain_is_thread_local() -> None:
    stack = ResolutionStack()
    seen: list[tuple[type, ...]] = []

    with stack.frame(_A):
        worker = threading.Thread(target=lambda: seen.append(stack.chain))
        worker.start()
        worker.join()

    assert seen == [()]
