"""Decimal context sizing for label arithmetic.

The default 28-digit context makes quantize() raise InvalidOperation once a
result needs more digits, so every step runs in a context wide enough for
its operands.
"""
from contextlib import contextmanager
from decimal import Decimal, localcontext
from typing import Iterable, Iterator, Optional

BASE_PRECISION = 28


def working_precision(values: Iterable[Optional[Decimal]]) -> int:
    """Return a precision that keeps products and 4-place quantizes exact.

    Each operand fits in len(digits) + abs(exponent) positional digits; one
    step multiplies at most four such operands (value, proportion, factor,
    normalization factor).
    """
    widest = 0
    for value in values:
        if value is None or not value.is_finite():
            continue
        _, digits, exponent = value.as_tuple()
        widest = max(widest, len(digits) + abs(exponent))
    return BASE_PRECISION + 4 * widest


@contextmanager
def sized_context(values: Iterable[Optional[Decimal]]) -> Iterator[None]:
    """Run the block in a local decimal context sized for values."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, working_precision(values))
        yield
