"""
Kernel capabilities consumed by the converters.

The converters never talk to a running kernel directly. The two narrow
fallback paths that need the kernel's own parser receive it as an injected
``evaluate`` callable; rendering defaults to ``render_native``.
"""

from typing import Callable, Optional, Protocol

from cas_interchange.core.domain.native import NativeNode
from cas_interchange.core.domain.rendering import render_native
from cas_interchange.core.errors import UnsupportedVariant

Evaluator = Callable[[str], NativeNode]
Renderer = Callable[[NativeNode], str]


class Kernel(Protocol):
    """Minimal surface of a computer-algebra kernel."""

    def evaluate(self, text: str) -> NativeNode:
        """Parse and evaluate kernel input text."""
        ...

    def render(self, node: NativeNode) -> str:
        """Render a node as kernel input text."""
        ...


def require_evaluator(evaluate: Optional[Evaluator], tag: str, text: str) -> Evaluator:
    """
    Return the injected evaluator or fail for the tag that needed it.

    Raises:
        UnsupportedVariant: if no evaluator was injected
    """
    if evaluate is None:
        raise UnsupportedVariant(tag, f"text fallback {text!r} needs a kernel evaluator")
    return evaluate


__all__ = ["Evaluator", "Kernel", "Renderer", "render_native", "require_evaluator"]
