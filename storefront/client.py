# storefront/client.py
import requests

from storefront.utils.logging import get_logger
from storefront.utils.retry import http_retry
from storefront.utils.settings import STOREFRONT_API_URL

logger = get_logger(__name__)


class StorefrontClient:
    """
    Klient HTTP dla procedur sklepu.
    Odczyty mają retry, mutacje nie (nie są idempotentne).
    """

    def __init__(self, base_url: str | None = None, customer_id: int | None = None, timeout: int = 2):
        self.base_url = (base_url or STOREFRONT_API_URL).rstrip("/")
        self.customer_id = customer_id
        self.timeout = timeout
        self.session = requests.Session()

    def _headers(self) -> dict:
        if self.customer_id is None:
            return {}
        return {"X-Customer-Id": str(self.customer_id)}

    def _request(self, method: str, path: str, **kwargs):
        url = f"{self.base_url}{path}"
        logger.debug(f"StorefrontClient {method} {url}")

        resp = self.session.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
        resp.raise_for_status()
        return resp.json()

    @http_retry()
    def _get(self, path: str, **params):
        return self._request("GET", path, params=params or None)

    # katalog
    def health(self) -> dict:
        return self._get("/health")

    def get_products(self) -> list:
        return self._get("/products/")

    def get_product(self, product_id: int) -> dict:
        return self._get(f"/products/{product_id}")

    def search_products(self, query: str) -> list:
        return self._get("/products/search", query=query)

    def check_variant_stock(self, variant_id: int, quantity: int) -> bool:
        return self._get(f"/variants/{variant_id}/stock", quantity=quantity)["available"]

    # klient i adresy
    def create_customer(self, email: str, first_name: str, last_name: str, phone: str | None = None) -> dict:
        payload = {"email": email, "first_name": first_name, "last_name": last_name, "phone": phone}
        return self._request("POST", "/customers/", json=payload)

    def create_address(self, **address) -> dict:
        return self._request("POST", "/addresses/", json=address)

    def get_addresses(self) -> list:
        return self._get("/addresses/")

    # koszyk
    def get_cart(self) -> dict:
        return self._get("/cart/")

    def add_to_cart(self, variant_id: int, quantity: int) -> dict:
        payload = {"product_variant_id": variant_id, "quantity": quantity}
        return self._request("POST", "/cart/items", json=payload)

    def update_cart_item(self, item_id: int, quantity: int) -> dict:
        return self._request("PATCH", f"/cart/items/{item_id}", json={"quantity": quantity})

    def remove_from_cart(self, item_id: int) -> dict:
        return self._request("DELETE", f"/cart/items/{item_id}")

    # zamówienia
    def create_order(self, billing_address_id: int, shipping_address_id: int, items: list[tuple[int, int]]) -> dict:
        payload = {
            "billing_address_id": billing_address_id,
            "shipping_address_id": shipping_address_id,
            "items": [{"product_variant_id": v, "quantity": q} for v, q in items],
        }
        return self._request("POST", "/orders/", json=payload)

    def get_orders(self) -> list:
        return self._get("/orders/")

    def get_order(self, order_id: int) -> dict:
        return self._get(f"/orders/{order_id}")

    def update_order_status(self, order_id: int, status: str) -> dict:
        return self._request("PATCH", f"/orders/{order_id}/status", json={"status": status})
