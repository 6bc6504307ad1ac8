# storefront/domain/errors.py


class NotFoundError(ValueError):
    """Brak rekordu (adres, klient, zamówienie, wariant, pozycja koszyka)."""


class ConflictError(ValueError):
    """Naruszenie reguł domeny: stan magazynu, unikalność, przejścia statusu."""
