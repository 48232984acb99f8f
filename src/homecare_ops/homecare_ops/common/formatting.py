from __future__ import annotations


def format_hours(hours: float) -> str:
    """Render fractional hours as ``"8h 30m"`` (minutes truncated)."""
    total_minutes = int(round(max(hours or 0, 0) * 60, 6))
    return f"{total_minutes // 60}h {total_minutes % 60}m"


def format_currency(amount: float, *, symbol: str = "$") -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"
