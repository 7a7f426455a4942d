"""
Shared fixtures.

RecordingKernel stands in for the kernel: it records every text it is asked
to evaluate and answers with a String node holding that text, so tests can
assert on exactly what would have been sent to the kernel.
"""

import pytest

from cas_interchange.conversion.kernel import Kernel
from cas_interchange.core.domain.native import (
    make_application_unevaluated,
    make_identifier,
    make_int,
    make_string,
)
from cas_interchange.core.domain.rendering import render_native


class RecordingKernel:
    """Fake kernel satisfying the Kernel protocol."""

    def __init__(self):
        self.evaluated: list[str] = []

    def evaluate(self, text: str):
        self.evaluated.append(text)
        return make_string(text)

    def render(self, node) -> str:
        return render_native(node)


@pytest.fixture
def kernel() -> Kernel:
    return RecordingKernel()


@pytest.fixture
def x():
    return make_identifier("x")


@pytest.fixture
def y():
    return make_identifier("y")


@pytest.fixture
def x_squared_plus_one(x):
    """x^2+1"""
    return make_application_unevaluated(
        "+",
        [make_application_unevaluated("^", [x, make_int(2)]), make_int(1)],
    )
