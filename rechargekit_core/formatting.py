"""
rechargekit_core.formatting
---------------------------
Display helpers shared by the Streamlit app and the PDF report.

All helpers are safe: None and nan render as an em dash instead of raising,
so a half-filled form never breaks the page.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

MISSING = "—"
NO_PAYBACK = "No payback (net cash flow not positive)"


def _is_missing(n) -> bool:
    if n is None:
        return True
    try:
        return math.isnan(float(n))
    except (TypeError, ValueError):
        return True


def fmt_number(n, digits: int = 2) -> str:
    """
    Format a number with thousands separators and at most `digits` decimals.

    Trailing zeros are dropped: 1.6667 -> "1.667" (digits=3), 200.0 -> "200".
    """
    if _is_missing(n):
        return MISSING
    x = float(n)
    if math.isinf(x):
        return "∞" if x > 0 else "-∞"

    digits = max(0, int(digits))
    text = f"{x:,.{digits}f}"
    if digits > 0:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def fmt_currency(n, digits: int = 0, symbol: str = "$") -> str:
    """
    Format a number as currency: 50000 -> "$50,000", -4000 -> "-$4,000".
    """
    if _is_missing(n):
        return MISSING
    x = float(n)
    if math.isinf(x):
        return f"{'-' if x < 0 else ''}{symbol}∞"

    digits = max(0, int(digits))
    text = f"{abs(x):,.{digits}f}"
    # Avoid "-$0" after rounding
    negative = x < 0 and float(text.replace(",", "")) != 0.0
    return f"{'-' if negative else ''}{symbol}{text}"


def fmt_payback(years: Optional[float], digits: int = 1) -> str:
    """"4.9 years", or the no-payback message when payback is not finite."""
    if _is_missing(years) or math.isinf(float(years)):
        return NO_PAYBACK
    return f"{fmt_number(years, digits)} years"


def results_rows(result, currency_digits: int = 0) -> List[Tuple[str, str]]:
    """
    Ordered (label, value) pairs for a result, as shown in the app and report.

    Digits for the hydraulic cards follow the web form: 3 for flow and daily
    recharge, 2 for seasonal recharge, 0 for excavation.
    """
    money = lambda v: fmt_currency(v, currency_digits)  # noqa: E731
    return [
        ("Average flow", f"{fmt_number(result.cfs, 3)} cfs"),
        ("Average flow (gpm)", f"{fmt_number(result.gpm, 1)} gpm"),
        ("Daily recharge", f"{fmt_number(result.daily_af, 3)} AF/day"),
        ("Seasonal recharge", f"{fmt_number(result.seasonal_af, 2)} AF / season"),
        ("Rough excavation", f"{fmt_number(result.excavation_yd3, 0)} yd³"),
        ("CAPEX (one-time)", money(result.capex)),
        ("Annual revenue (credits)", money(result.revenue)),
        ("Annual O&M", money(result.om)),
        ("Annual pumping cost", money(result.pumping_cost)),
        ("Total annual cost", money(result.total_annual_cost)),
        ("Net annual cash flow", money(result.net_annual)),
        ("Simple payback", fmt_payback(result.simple_payback_yrs)),
    ]
