def format_currency(amount: float, symbol: str = "$") -> str:
    """Format a float as currency string, e.g. '$1,234.56'."""
    return f"{symbol}{amount:,.2f}"


def format_transaction_amount(amount: float, is_income: bool, symbol: str = "$") -> str:
    """Prefix the magnitude with + for income and - for expenses."""
    sign = "+" if is_income else "-"
    return f"{sign}{format_currency(abs(amount), symbol)}"


def format_axis_value(value: float) -> str:
    """Compact y-axis tick label: 1500 -> '1.5k', 250 -> '250'."""
    if abs(value) >= 1000:
        return f"{value / 1000:.1f}k".replace(".0k", "k")
    return f"{value:.0f}"
