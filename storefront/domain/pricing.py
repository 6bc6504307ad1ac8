# storefront/domain/pricing.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from storefront.utils import settings

CENT = Decimal("0.01")


def round2(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def unit_price(base_price: Decimal, price_adjustment: Decimal) -> Decimal:
    return round2(Decimal(base_price) + Decimal(price_adjustment))


@dataclass(frozen=True)
class PriceSummary:
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal


def price_summary(
    subtotal: Decimal,
    tax_rate: Decimal | None = None,
    free_shipping_threshold: Decimal | None = None,
    flat_shipping_fee: Decimal | None = None,
) -> PriceSummary:
    """
    Jedna polityka cenowa dla koszyka i zamówienia.

    tax = round2(subtotal * rate), darmowa wysyłka od progu (>=) i dla pustego koszyka,
    total = round2(subtotal + tax + shipping).
    """
    rate = settings.TAX_RATE if tax_rate is None else tax_rate
    threshold = (
        settings.FREE_SHIPPING_THRESHOLD
        if free_shipping_threshold is None
        else free_shipping_threshold
    )
    fee = settings.FLAT_SHIPPING_FEE if flat_shipping_fee is None else flat_shipping_fee

    subtotal = round2(subtotal)
    tax = round2(subtotal * rate)
    # pusty koszyk nie ma kosztu wysyłki
    if subtotal == 0 or subtotal >= threshold:
        shipping = Decimal("0.00")
    else:
        shipping = round2(fee)
    total = round2(subtotal + tax + shipping)

    return PriceSummary(subtotal=subtotal, tax=tax, shipping=shipping, total=total)
