from __future__ import annotations

import pytest

pytest_plugins = ["pytester"]


def test_context_fixture_restores_previous_container(pytester: pytest.Pytester) -> None:
    pytester.makepyfile(
        """
        from wirebox import Container, container_context

        pytest_plugins = ["wirebox.integrations.pytest_plugin"]

        ORIGINAL = Container(discover=False)
        container_context.set_current(ORIGINAL)


        def test_uses_fixture(wirebox_context):
            assert container_context.get_current() is wirebox_context
            assert wirebox_context is not ORIGINAL


        def test_previous_is_restored():
            assert container_context.get_current() is ORIGINAL
        """,
    )

    result = pytester.runpytest_subprocess()

    result.assert_outcomes(passed=2)


def test_container_fixture_fails_on_leaked_resolution_chain(pytester: pytest.Pytester) -> None:
    pytester.makepyfile(
        """
        pytest_plugins = ["wirebox.integrations.pytest_plugin"]


        OPEN_FRAMES = []


        class Leaky:
            pass


        def test_leaks(wirebox_container):
            frame = wirebox_container._stack.frame(Leaky)
            frame.__enter__()
            OPEN_FRAMES.append(frame)


        def test_balanced_resolution(wirebox_container):
            with wirebox_container._stack.frame(Leaky):
                pass
        """,
    )

    result = pytester.runpytest_subprocess()

    result.assert_outcomes(passed=1, failed=1)
    result.stdout.fnmatch_lines(["*resolution stack leaked past the test: Leaky*"])
