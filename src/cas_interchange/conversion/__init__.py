"""
Native <-> interchange converters.
"""

from cas_interchange.conversion.backward import InterchangeToNative, to_native
from cas_interchange.conversion.config import ConversionConfig
from cas_interchange.conversion.forward import to_interchange
from cas_interchange.conversion.kernel import Evaluator, Kernel, Renderer

__all__ = [
    "ConversionConfig",
    "InterchangeToNative",
    "to_interchange",
    "to_native",
    # Kernel capabilities
    "Evaluator",
    "Kernel",
    "Renderer",
]
