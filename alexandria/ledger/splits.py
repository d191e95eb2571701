"""
Split arithmetic for the revenue ledger.

Amounts are ``Decimal`` and rounded half-up to two decimal places. The
educator share is derived by subtraction so the two shares always add up to
the payment total exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Sequence, Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value: Number) -> Decimal:
    """Convert a number to ``Decimal`` without binary float artefacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize(value: Number) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_split_amount(total: Number, percentage: Number) -> Decimal:
    """Share of ``total`` for ``percentage`` percent, rounded to cents.

    Args:
        total: Payment total, strictly positive
        percentage: Share in percent, between 0 and 100

    Returns:
        The share rounded half-up to two decimal places

    Raises:
        ValueError: If the total or the percentage is out of range
    """
    total_d = to_decimal(total)
    pct = to_decimal(percentage)
    if total_d <= 0:
        raise ValueError(f"Split total must be positive, got {total_d}")
    if pct < 0 or pct > HUNDRED:
        raise ValueError(f"Split percentage must be between 0 and 100, got {pct}")
    return quantize(total_d * pct / HUNDRED)


@dataclass(frozen=True)
class SplitBreakdown:
    """Platform and educator shares of one payment."""

    total_amount: Decimal
    platform_fee: Decimal
    educator_amount: Decimal
    platform_percentage: Decimal
    educator_percentage: Decimal

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_amount": float(self.total_amount),
            "platform_fee": float(self.platform_fee),
            "educator_amount": float(self.educator_amount),
            "platform_percentage": float(self.platform_percentage),
            "educator_percentage": float(self.educator_percentage),
        }


def compute_split(total: Number, platform_percentage: Number) -> SplitBreakdown:
    """Split a payment total between the platform and the educator.

    Args:
        total: Payment total, strictly positive
        platform_percentage: Platform share in percent

    Returns:
        SplitBreakdown whose two shares sum to ``total``
    """
    total_d = quantize(total)
    pct = to_decimal(platform_percentage)
    platform_fee = calculate_split_amount(total_d, pct)
    return SplitBreakdown(
        total_amount=total_d,
        platform_fee=platform_fee,
        educator_amount=total_d - platform_fee,
        platform_percentage=pct,
        educator_percentage=HUNDRED - pct,
    )


def allocate_refund(refund_amount: Number, percentages: Sequence[Number]) -> list[Decimal]:
    """Spread a refund over the split rows of a payment.

    Every row but the last gets its percentage of the refund, rounded to
    cents; the last row takes the remainder so the parts add up to the
    refund exactly.

    Args:
        refund_amount: Amount refunded, strictly positive
        percentages: Percentage of each split row, in row order

    Returns:
        Refunded part of each row, in the same order

    Raises:
        ValueError: If no rows are given or an amount is out of range
    """
    if not percentages:
        raise ValueError("A refund needs at least one split row")
    refund = quantize(refund_amount)
    parts = [calculate_split_amount(refund, pct) for pct in percentages[:-1]]
    parts.append(refund - sum(parts, Decimal("0")))
    return parts
