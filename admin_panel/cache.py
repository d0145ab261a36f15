# admin_panel/cache.py
# Client-side dashboard state. Counters are derived from the cached lists;
# lists and stats carry generation tokens so a late response never overwrites
# a newer one.
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from .client import AdminAPIError, AdminClient

logger = logging.getLogger(__name__)

RESOURCES = ("users", "products", "orders")
VIEWS = ("dashboard",) + RESOURCES

SUMMARY_ERROR = "Failed to load dashboard stats"


@dataclass(frozen=True)
class Counters:
    users: int
    customers: int
    sellers: int
    admins: int
    products: int
    orders: int


class DashboardCache:
    def __init__(self):
        self.view = "dashboard"
        self.error = ""
        self.stats: Optional[Dict[str, Any]] = None
        self._lists: Dict[str, List[Dict[str, Any]]] = {r: [] for r in RESOURCES}
        self._generation = {r: 0 for r in RESOURCES}
        self._pending = set()
        self._stats_generation = 0

    def _check(self, resource: str) -> None:
        if resource not in RESOURCES:
            raise ValueError(f"Unknown resource: {resource}")

    @property
    def users(self) -> List[Dict[str, Any]]:
        return list(self._lists["users"])

    @property
    def products(self) -> List[Dict[str, Any]]:
        return list(self._lists["products"])

    @property
    def orders(self) -> List[Dict[str, Any]]:
        return list(self._lists["orders"])

    @property
    def loading(self) -> bool:
        return self.view in self._pending

    @property
    def counters(self) -> Counters:
        roles = [u.get("role") for u in self._lists["users"]]
        return Counters(
            users=len(roles),
            customers=roles.count("customer"),
            sellers=roles.count("seller"),
            admins=roles.count("admin"),
            products=len(self._lists["products"]),
            orders=len(self._lists["orders"]),
        )

    @property
    def revenue(self) -> float:
        return float(self.stats.get("totalRevenue", 0)) if self.stats else 0.0

    # actions

    def view_switched(self, view: str) -> None:
        if view not in VIEWS:
            raise ValueError(f"Unknown view: {view}")
        self.view = view
        self.error = ""

    def begin_fetch(self, resource: str) -> int:
        self._check(resource)
        self._generation[resource] += 1
        self._pending.add(resource)
        return self._generation[resource]

    def is_current(self, resource: str, token: int) -> bool:
        return self._generation[resource] == token

    def list_replaced(self, resource: str, items: List[Dict[str, Any]], token: int) -> bool:
        self._check(resource)
        if not self.is_current(resource, token):
            logger.debug("Dropping stale %s response (token %s, latest %s)",
                         resource, token, self._generation[resource])
            return False
        self._lists[resource] = list(items)
        self._pending.discard(resource)
        return True

    def fetch_abandoned(self, resource: str, token: int) -> None:
        if self.is_current(resource, token):
            self._pending.discard(resource)

    def item_removed(self, resource: str, record_id: int) -> bool:
        self._check(resource)
        before = self._lists[resource]
        self._lists[resource] = [r for r in before if r.get("id") != record_id]
        return len(self._lists[resource]) != len(before)

    def item_updated(self, resource: str, record: Dict[str, Any]) -> bool:
        self._check(resource)
        replaced = False
        items = []
        for r in self._lists[resource]:
            if r.get("id") == record.get("id"):
                items.append(record)
                replaced = True
            else:
                items.append(r)
        self._lists[resource] = items
        return replaced

    def begin_stats_fetch(self) -> int:
        self._stats_generation += 1
        return self._stats_generation

    def stats_replaced(self, stats: Dict[str, Any], token: int) -> bool:
        if token != self._stats_generation:
            logger.debug("Dropping stale stats (token %s, latest %s)", token, self._stats_generation)
            return False
        self.stats = dict(stats)
        return True

    def fetch_failed(self, message: str) -> None:
        self.error = message


class DashboardController:
    def __init__(self, client: AdminClient, cache: Optional[DashboardCache] = None):
        self.client = client
        self.cache = cache if cache is not None else DashboardCache()
        self._fetchers = {
            "users": client.list_users,
            "products": client.list_products,
            "orders": client.list_orders,
        }

    async def load_summary(self) -> bool:
        """Fetch every list plus the server stats; sets the banner error on failure."""
        tokens = {r: self.cache.begin_fetch(r) for r in RESOURCES}
        stats_token = self.cache.begin_stats_fetch()
        try:
            users, products, orders, stats = await asyncio.gather(
                self.client.list_users(),
                self.client.list_products(),
                self.client.list_orders(),
                self.client.dashboard(),
            )
        except (AdminAPIError, httpx.HTTPError) as exc:
            logger.warning("Dashboard summary failed: %s", exc)
            for resource, token in tokens.items():
                self.cache.fetch_abandoned(resource, token)
            self.cache.fetch_failed(SUMMARY_ERROR)
            return False

        for resource, items in zip(RESOURCES, (users, products, orders)):
            self.cache.list_replaced(resource, items, tokens[resource])
        self.cache.stats_replaced(stats, stats_token)
        return True

    async def switch_view(self, view: str) -> bool:
        """Show ``view``; returns False when a newer fetch superseded this one."""
        self.cache.view_switched(view)
        if view == "dashboard":
            return True

        token = self.cache.begin_fetch(view)
        try:
            items = await self._fetchers[view]()
        except Exception:
            self.cache.fetch_abandoned(view, token)
            raise
        return self.cache.list_replaced(view, items, token)

    async def _delete(self, resource: str, call, record_id: int) -> None:
        try:
            await call(record_id)
        except AdminAPIError as exc:
            if not exc.not_found:
                raise
            # already gone on the server; drop the local row as well
            logger.warning("%s %s was already deleted", resource, record_id)
        self.cache.item_removed(resource, record_id)

    async def delete_user(self, user_id: int) -> None:
        await self._delete("users", self.client.delete_user, user_id)

    async def delete_product(self, product_id: int) -> None:
        await self._delete("products", self.client.delete_product, product_id)

    async def delete_order(self, order_id: int) -> None:
        await self._delete("orders", self.client.delete_order, order_id)

    async def update_order_status(self, order_id: int, order_status: str) -> Dict[str, Any]:
        body = await self.client.update_order_status(order_id, order_status)
        self.cache.item_updated("orders", body["order"])
        return body["order"]

    async def update_product_price(self, product_id: int, price: float) -> Dict[str, Any]:
        body = await self.client.update_product_price(product_id, price)
        self.cache.item_updated("products", body["product"])
        return body["product"]

    async def update_user_role(self, user_id: int, role: str) -> Dict[str, Any]:
        body = await self.client.update_user_role(user_id, role)
        self.cache.item_updated("users", body["user"])
        return body["user"]
