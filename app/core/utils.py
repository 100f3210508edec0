from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_UP, getcontext
from typing import List, Sequence
from app.core.config import settings

getcontext().prec = 28
CENTS = Decimal("0.01")
ZERO = Decimal("0")

# Two balances closer than this are treated as equal
BALANCE_TOLERANCE = Decimal("0.01")
# Anything below half a cent is rounding noise, not a debt
SETTLEMENT_EPSILON = Decimal("0.005")


def qround(d: Decimal) -> Decimal:
    return d.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_decimal(value) -> Decimal:
    """
    Converts ints, floats, strings and Decimals to Decimal.
    Floats go through str() so 0.1 stays 0.1.
    Raises ValueError for anything that is not a finite number.
    """
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    elif isinstance(value, (int, float)):
        d = Decimal(str(value))
    else:
        try:
            d = Decimal(str(value).strip())
        except (InvalidOperation, TypeError):
            raise ValueError(f"Not a number: {value!r}")

    if not d.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return d


def format_currency(amount) -> str:
    amount = qround(to_decimal(amount))
    sign = "-" if amount < 0 else ""
    return f"{sign}{settings.CURRENCY_SYMBOL}{abs(amount):,.2f}"


def split_equally(amount: Decimal, parts: int) -> List[Decimal]:
    """
    Splits amount into `parts` cent-exact shares. Leftover cents go to the
    first shares so the shares always add up to the rounded amount.
    """
    if parts <= 0:
        raise ValueError("Cannot split between zero members")

    total = qround(to_decimal(amount))
    base = (total / parts).quantize(CENTS, rounding=ROUND_DOWN)
    leftover = int((total - base * parts) / CENTS)

    return [base + CENTS if i < leftover else base for i in range(parts)]


def split_by_percentage(amount: Decimal, percentages: Sequence[Decimal]) -> List[Decimal]:
    total = qround(to_decimal(amount))
    pcts = [to_decimal(p) for p in percentages]

    if any(p < 0 for p in pcts):
        raise ValueError("Percentages must not be negative")
    if abs(sum(pcts, ZERO) - 100) > BALANCE_TOLERANCE:
        raise ValueError(f"Percentages must add up to 100 (got {sum(pcts, ZERO)})")

    shares = [qround(total * p / 100) for p in pcts]

    # rounding drift lands on the largest share
    drift = total - sum(shares, ZERO)
    if drift and shares:
        idx = max(range(len(shares)), key=lambda i: shares[i])
        shares[idx] += drift

    return shares
