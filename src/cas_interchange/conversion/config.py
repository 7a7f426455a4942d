"""Conversion configuration."""

from dataclasses import dataclass

from cas_interchange.core.domain.native import NATIVE_INT_MAX, NATIVE_INT_MIN


@dataclass(frozen=True)
class ConversionConfig:
    """Settings for the backward converter and the SymPy adapter.

    Attributes:
        native_int_min: Smallest integer stored as an immediate Int node
        native_int_max: Largest integer stored as an immediate Int node
        use_byte_transcoder: Build BigInt nodes from bytes. When False, big
            integers are rebuilt by re-evaluating their decimal text through
            the kernel (requires an evaluator)
    """

    native_int_min: int = NATIVE_INT_MIN
    native_int_max: int = NATIVE_INT_MAX
    use_byte_transcoder: bool = True

    def __post_init__(self):
        # Can only narrow the kernel's immediate range
        if self.native_int_min < NATIVE_INT_MIN or self.native_int_max > NATIVE_INT_MAX:
            raise ValueError(
                f"native int range must lie within [{NATIVE_INT_MIN}, {NATIVE_INT_MAX}]"
            )
        if self.native_int_min > self.native_int_max:
            raise ValueError(
                f"native_int_min {self.native_int_min} must be <= native_int_max {self.native_int_max}"
            )
