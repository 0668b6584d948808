from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

_CENT = Decimal("0.01")
_HUNDRED = Decimal("100")


def final_price(price: Decimal, discount_percent: Optional[Decimal]) -> Decimal:
    """Price a buyer pays: ``price`` is the list price, the discount applies on top.

    >>> final_price(Decimal("200"), Decimal("25"))
    Decimal('150.00')
    >>> final_price(Decimal("99.99"), None)
    Decimal('99.99')
    """

    price = Decimal(price)
    if not discount_percent or Decimal(discount_percent) <= 0:
        return price.quantize(_CENT, rounding=ROUND_HALF_UP)

    discounted = price * (Decimal("1") - Decimal(discount_percent) / _HUNDRED)
    return discounted.quantize(_CENT, rounding=ROUND_HALF_UP)
