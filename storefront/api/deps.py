# storefront/api/deps.py
from dataclasses import dataclass

from fastapi import Header, HTTPException

from storefront.domain.errors import ConflictError, NotFoundError


@dataclass(frozen=True)
class CallerContext:
    """Klient, w imieniu którego wykonywany jest request."""

    customer_id: int


def get_caller(x_customer_id: int = Header(..., alias="X-Customer-Id", gt=0)) -> CallerContext:
    # brak autoryzacji - tożsamość przychodzi jawnie w nagłówku
    return CallerContext(customer_id=x_customer_id)


def http_error(e: Exception) -> HTTPException:
    """Mapowanie błędów domeny na kody HTTP."""
    if isinstance(e, PermissionError):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, ConflictError):
        return HTTPException(status_code=409, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))
