import asyncio

import httpx
import pytest

from admin_panel.cache import SUMMARY_ERROR, DashboardController
from admin_panel.client import AdminAPIError, AdminClient


@pytest.fixture
async def dash(app, admin_token):
    async with AdminClient(admin_token, base_url="http://test", transport=httpx.ASGITransport(app=app)) as client:
        yield DashboardController(client)


async def test_summary_counters_match_server_stats(dash):
    assert await dash.load_summary()
    c = dash.cache.counters
    stats = dash.cache.stats
    assert c.customers == stats["totalCustomers"] == 3
    assert c.sellers == stats["totalSellers"] == 2
    assert c.admins == stats["totalAdmins"] == 1
    assert c.products == stats["totalProducts"] == 5
    assert c.orders == stats["totalOrders"] == 4
    assert dash.cache.revenue == 60


async def test_delete_reconciles_without_refetch(dash, seeded):
    await dash.load_summary()
    bob = seeded["users"]["bob@example.com"]

    await dash.delete_user(bob.id)
    assert bob.id not in [u["id"] for u in dash.cache.users]
    assert dash.cache.counters.users == 5
    assert dash.cache.counters.customers == 2

    await dash.delete_product(seeded["products"][0].id)
    await dash.delete_order(seeded["orders"][0].id)
    assert dash.cache.counters.products == 4
    assert dash.cache.counters.orders == 3


async def test_delete_of_a_record_already_gone(dash, seeded):
    await dash.load_summary()
    target = seeded["products"][1]
    await dash.client.delete_product(target.id)

    # the server answers 404; the local row still goes and counters stay true
    await dash.delete_product(target.id)
    assert dash.cache.counters.products == 4
    assert target.id not in [p["id"] for p in dash.cache.products]


async def test_status_update_replaces_the_row(dash, seeded):
    await dash.switch_view("orders")
    order = seeded["orders"][2]

    updated = await dash.update_order_status(order.id, "delivered")
    assert updated["orderStatus"] == "delivered"
    row = next(o for o in dash.cache.orders if o["id"] == order.id)
    assert row == updated
    assert dash.cache.counters.orders == 4


async def test_invalid_status_leaves_the_cache_alone(dash, seeded):
    await dash.switch_view("orders")
    before = dash.cache.orders

    with pytest.raises(AdminAPIError) as info:
        await dash.update_order_status(seeded["orders"][0].id, "teleported")
    assert info.value.status_code == 422
    assert info.value.code == "validation_failure"
    assert dash.cache.orders == before


async def test_price_and_role_updates(dash, seeded):
    await dash.load_summary()
    product = seeded["products"][3]
    carol = seeded["users"]["carol@example.com"]

    await dash.update_product_price(product.id, 99.0)
    assert next(p for p in dash.cache.products if p["id"] == product.id)["price"] == 99.0

    await dash.update_user_role(carol.id, "seller")
    assert dash.cache.counters.sellers == 3
    assert dash.cache.counters.customers == 2


async def test_summary_failure_sets_banner(app, seeded):
    async with AdminClient("bad-token", base_url="http://test", transport=httpx.ASGITransport(app=app)) as client:
        dash = DashboardController(client)
        assert not await dash.load_summary()
    assert dash.cache.error == SUMMARY_ERROR
    assert dash.cache.counters.users == 0


async def test_switch_view_raises_on_failure(app, seeded):
    async with AdminClient("bad-token", base_url="http://test", transport=httpx.ASGITransport(app=app)) as client:
        dash = DashboardController(client)
        with pytest.raises(AdminAPIError) as info:
            await dash.switch_view("users")
    assert info.value.status_code == 401
    assert not dash.cache.loading


async def test_late_response_does_not_overwrite_newer_view():
    calls = []
    gates = [asyncio.Event(), asyncio.Event()]

    async def handler(request):
        n = len(calls)
        calls.append(request.url.path)
        await gates[n].wait()
        return httpx.Response(200, json=[{"id": n + 1, "name": f"batch {n + 1}", "role": "customer"}])

    async with AdminClient("t", base_url="http://test", transport=httpx.MockTransport(handler)) as client:
        dash = DashboardController(client)

        first = asyncio.create_task(dash.switch_view("users"))
        while len(calls) < 1:
            await asyncio.sleep(0)
        second = asyncio.create_task(dash.switch_view("users"))
        while len(calls) < 2:
            await asyncio.sleep(0)

        gates[1].set()
        assert await second
        assert not dash.cache.loading

        gates[0].set()
        assert not await first

    assert calls == ["/api/admin/users", "/api/admin/users"]
    assert dash.cache.users == [{"id": 2, "name": "batch 2", "role": "customer"}]


async def test_error_body_without_json():
    def handler(request):
        return httpx.Response(502, text="bad gateway")

    async with AdminClient("t", base_url="http://test", transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(AdminAPIError) as info:
            await client.dashboard()
    assert info.value.status_code == 502
    assert info.value.message == "Bad Gateway"


async def test_summary_with_non_json_body_sets_banner():
    def handler(request):
        return httpx.Response(200, text="<html>proxy login</html>", headers={"content-type": "text/html"})

    async with AdminClient("t", base_url="http://test", transport=httpx.MockTransport(handler)) as client:
        dash = DashboardController(client)
        dash.cache.view_switched("users")
        assert not await dash.load_summary()

        with pytest.raises(AdminAPIError) as info:
            await client.list_orders()

    assert dash.cache.error == SUMMARY_ERROR
    assert not dash.cache.loading
    assert info.value.status_code == 200
    assert info.value.code == "bad_response"
