"""Helpers for the two-decimal euro amounts stored on products and orders."""


def round_money(amount: float) -> float:
    return round(float(amount or 0.0), 2)


def format_eur(amount: float) -> str:
    """Render an amount the way order logs and exports show it: ``€12.50``."""
    return f"€{round_money(amount):.2f}"


def to_cents(amount: float) -> int:
    return int(round(round_money(amount) * 100))
