"""
Conversion errors and warnings.

Taxonomy:
- UnsupportedVariant: a native or interchange tag has no conversion rule and
  no fallback path (fatal)
- PrecisionLossRisk: a big integer would have to pass through a fixed-width
  type because neither the byte transcoder nor a text evaluator is available
- SyntaxFallbackError: the fallback parser could not interpret a fragment
- UnmappedOperatorWarning: an operator fell back to textual reconstruction
  (non-fatal, emitted through the warnings module)
"""


class ConversionError(Exception):
    """Base class for every fatal conversion failure."""

    pass


class UnsupportedVariant(ConversionError):
    """
    A node variant has no conversion rule and no fallback path.

    Attributes:
        tag: Name of the offending native kind or interchange operator
    """

    def __init__(self, tag: str, detail: str = ""):
        self.tag = tag
        message = f"Unsupported variant '{tag}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class PrecisionLossRisk(ConversionError):
    """Raised instead of silently narrowing an integer to a fixed-width type."""

    pass


class SyntaxFallbackError(ConversionError):
    """
    The syntax-fallback parser could not interpret a textual fragment.

    Attributes:
        fragment: The substring that failed to parse
    """

    def __init__(self, fragment: str, detail: str = ""):
        self.fragment = fragment
        message = f"Cannot parse expression fragment {fragment!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UnmappedOperatorWarning(UserWarning):
    """An interchange operator had no native recipe and was rebuilt from text."""

    pass
