# booking/services/price_display.py
#
# Purpose:
# - Turn the integer cents stored on Service into display strings, and back.
# - Used by the admin list pages and the seed_services command. The JSON API
#   always returns raw cents.

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


class PriceDisplayService:
    """
    Helpers for money shown to humans.

    All amounts are stored as integer minor units (cents). Conversions go
    through Decimal so 0.1 + 0.2 style float errors never reach the database.
    """

    @staticmethod
    def format_cents(cents, currency_symbol="$"):
        """
        Format an amount in cents with currency symbol and two decimals.

        Args:
            cents: int (or anything int() accepts)
            currency_symbol: prefix, default "$"

        Returns:
            str: e.g. 3500 -> "$35.00". Unparseable input renders as "$0.00".
        """
        try:
            amount = Decimal(int(cents)) / 100
        except (ValueError, TypeError, InvalidOperation):
            return f"{currency_symbol}0.00"
        return f"{currency_symbol}{amount:.2f}"

    @staticmethod
    def dollars_to_cents(value):
        """
        Parse a dollar amount ("35.00", 35, Decimal("35.5")) into cents.
        Half-cent amounts round up. Anything unparseable becomes 0.
        """
        try:
            amount = Decimal(str(value).strip())
        except (ValueError, TypeError, InvalidOperation):
            return 0
        if not amount.is_finite():
            return 0
        return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @staticmethod
    def format_service_display(service):
        """Name, price and duration on one line: "Haircut - $35.00 (30 min)"."""
        price = PriceDisplayService.format_cents(service.price_cents)
        return f"{service.name} - {price} ({service.duration_min} min)"
