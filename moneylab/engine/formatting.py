"""Display strings for warnings and insights. USD only."""

from decimal import Decimal


def format_currency(amount: Decimal, cents: bool = False) -> str:
    sign = "-" if amount < 0 else ""
    if cents:
        return f"{sign}${abs(float(amount)):,.2f}"
    return f"{sign}${abs(float(amount)):,.0f}"


def format_percent(percent: Decimal) -> str:
    """Format an annual percentage without trailing zeros (4.50 -> '4.5%', 0.01 -> '0.01%')."""
    return f"{percent.normalize():f}%"


def format_months(months: int) -> str:
    years, remainder = divmod(months, 12)

    def plural(n: int, unit: str) -> str:
        return f"{n} {unit}{'' if n == 1 else 's'}"

    if years == 0:
        return plural(months, "month")
    if remainder == 0:
        return plural(years, "year")
    return f"{plural(years, 'year')} and {plural(remainder, 'month')}"
