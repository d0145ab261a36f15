# admin_panel/client.py
import os
from typing import Any, Dict, List, Optional

import httpx

ADMIN_API_URL = os.getenv("ADMIN_API_URL", "http://localhost:8000")


class AdminAPIError(Exception):
    """Non-2xx answer from the admin API."""

    def __init__(self, status_code: int, message: str, code: Optional[str] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.code = code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class AdminClient:
    """Async client for the /api/admin surface.

    No retries and no cancellation: each call is a single request whose
    failure is raised to the caller as :class:`AdminAPIError`.
    """

    def __init__(
        self,
        token: str,
        base_url: str = ADMIN_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/api/admin",
            headers={"Authorization": f"Bearer {token}"},
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        resp = await self._http.request(method, path, json=json)
        if resp.is_success:
            try:
                return resp.json()
            except ValueError:
                # e.g. an HTML page from a proxy in front of the API
                raise AdminAPIError(resp.status_code, "Response is not JSON", "bad_response")
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        raise AdminAPIError(resp.status_code, body.get("message") or resp.reason_phrase, body.get("code"))

    # 📊
    async def dashboard(self) -> Dict[str, Any]:
        return await self._request("GET", "/dashboard")

    # 👥
    async def list_users(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/users")

    async def delete_user(self, user_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/users/{user_id}")

    async def update_user_role(self, user_id: int, role: str) -> Dict[str, Any]:
        return await self._request("PUT", f"/users/{user_id}/role", json={"role": role})

    # 📦
    async def list_products(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/products")

    async def delete_product(self, product_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/products/{product_id}")

    async def update_product_price(self, product_id: int, price: float) -> Dict[str, Any]:
        return await self._request("PUT", f"/products/{product_id}/price", json={"price": price})

    # 🛒
    async def list_orders(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/orders")

    async def delete_order(self, order_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/orders/{order_id}")

    async def update_order_status(self, order_id: int, order_status: str) -> Dict[str, Any]:
        return await self._request("PUT", f"/orders/{order_id}/status", json={"orderStatus": order_status})
