# storefront/domain/enums.py
from enum import Enum


class ShoeSize(str, Enum):
    S5 = "5"
    S5_5 = "5.5"
    S6 = "6"
    S6_5 = "6.5"
    S7 = "7"
    S7_5 = "7.5"
    S8 = "8"
    S8_5 = "8.5"
    S9 = "9"
    S9_5 = "9.5"
    S10 = "10"
    S10_5 = "10.5"
    S11 = "11"
    S11_5 = "11.5"
    S12 = "12"
    S12_5 = "12.5"
    S13 = "13"
    S13_5 = "13.5"
    S14 = "14"


class ShoeColor(str, Enum):
    BLACK = "black"
    WHITE = "white"
    BROWN = "brown"
    NAVY = "navy"
    RED = "red"
    BLUE = "blue"
    GRAY = "gray"
    GREEN = "green"
    PINK = "pink"
    PURPLE = "purple"
    YELLOW = "yellow"
    ORANGE = "orange"
    BEIGE = "beige"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class AddressType(str, Enum):
    BILLING = "billing"
    SHIPPING = "shipping"


def enum_values(enum_cls):
    """Do kolumn SQLAlchemy Enum - zapisujemy wartości, nie nazwy."""
    return [member.value for member in enum_cls]
