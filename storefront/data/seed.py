# storefront/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.database import SessionLocal
from storefront.data.models import CartModel, CustomerModel, ProductModel, ProductVariantModel
from storefront.domain.enums import ShoeColor, ShoeSize
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_CUSTOMER = {
    "email": "demo@storefront.local",
    "first_name": "Demo",
    "last_name": "Customer",
    "phone": None,
}

# (nazwa, marka, kategoria, cena, [(rozmiar, kolor, stan, dopłata)])
DEMO_CATALOG = [
    (
        "Air Runner",
        "Stride",
        "running",
        Decimal("129.99"),
        [
            (ShoeSize.S9, ShoeColor.BLACK, 12, Decimal("0")),
            (ShoeSize.S10, ShoeColor.BLACK, 8, Decimal("0")),
            (ShoeSize.S10, ShoeColor.WHITE, 5, Decimal("10.00")),
        ],
    ),
    (
        "Trail Peak",
        "Summit",
        "hiking",
        Decimal("189.99"),
        [
            (ShoeSize.S8_5, ShoeColor.BROWN, 6, Decimal("0")),
            (ShoeSize.S11, ShoeColor.GREEN, 4, Decimal("-15.00")),
        ],
    ),
    (
        "City Loafer",
        "Urbano",
        "casual",
        Decimal("79.50"),
        [
            (ShoeSize.S7, ShoeColor.NAVY, 10, Decimal("0")),
            (ShoeSize.S7_5, ShoeColor.BEIGE, 3, Decimal("5.00")),
        ],
    ),
]


def _sku(brand: str, name: str, size: ShoeSize, color: ShoeColor) -> str:
    slug = f"{brand}-{name}".upper().replace(" ", "")
    return f"{slug}-{size.value}-{color.value.upper()}"


def seed(db: Session | None = None) -> bool:
    """Demo katalog + demo klient z koszykiem. Tylko dla pustej bazy."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        # nie nadpisujemy: seed tylko dla pustej bazy
        if db.query(ProductModel).first():
            return False

        for name, brand, category, price, variants in DEMO_CATALOG:
            product = ProductModel(name=name, brand=brand, category=category, base_price=price)
            product.variants = [
                ProductVariantModel(
                    size=size,
                    color=color,
                    stock_quantity=stock,
                    price_adjustment=adjustment,
                    sku=_sku(brand, name, size, color),
                )
                for size, color, stock, adjustment in variants
            ]
            db.add(product)

        customer = CustomerModel(**DEMO_CUSTOMER)
        customer.cart = CartModel()
        db.add(customer)

        db.commit()
        logger.info(f"Seeded {len(DEMO_CATALOG)} products and demo customer {customer.id}")
        return True
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    seed()
