async def test_orders_nest_customer_and_products(client, admin_headers, seeded):
    r = await client.get("/api/admin/orders", headers=admin_headers)
    assert r.status_code == 200
    orders = r.json()
    assert len(orders) == 4

    alice = seeded["users"]["alice@example.com"]
    first = orders[0]
    assert first["customer"] == {"id": alice.id, "name": "Alice Customer", "email": "alice@example.com"}
    assert first["paymentStatus"] == "paid"
    assert first["orderStatus"] == "processing"
    assert first["totalAmount"] == 10


async def test_shared_product_is_joined_in_every_order(client, admin_headers, seeded):
    air_filter = seeded["products"][0]
    orders = (await client.get("/api/admin/orders", headers=admin_headers)).json()

    lines = [it for o in orders for it in o["items"] if it["productId"] == air_filter.id]
    assert len(lines) == 2
    for it in lines:
        assert it["product"] == {
            "id": air_filter.id,
            "name": "Air filter",
            "image": "/static/img/air-filter.jpg",
            "price": 19.9,
        }
    # the line keeps its own price snapshot
    assert sorted(it["price"] for it in lines) == [10, 22.5]


async def test_update_status(client, admin_headers, seeded):
    order = seeded["orders"][3]
    r = await client.put(f"/api/admin/orders/{order.id}/status", json={"orderStatus": "shipped"}, headers=admin_headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Order status updated"
    assert body["order"]["id"] == order.id
    assert body["order"]["orderStatus"] == "shipped"
    # the returned order has the same shape as the list entries
    assert body["order"]["customer"]["email"] == "alice@example.com"
    assert len(body["order"]["items"]) == 2

    orders = (await client.get("/api/admin/orders", headers=admin_headers)).json()
    assert {o["id"]: o["orderStatus"] for o in orders}[order.id] == "shipped"


async def test_update_status_last_write_wins(client, admin_headers, seeded):
    order = seeded["orders"][0]
    for status in ("shipped", "delivered", "cancelled"):
        r = await client.put(f"/api/admin/orders/{order.id}/status", json={"orderStatus": status}, headers=admin_headers)
        assert r.status_code == 200
    assert r.json()["order"]["orderStatus"] == "cancelled"


async def test_update_status_rejects_values_outside_the_enumeration(client, admin_headers, seeded):
    order = seeded["orders"][0]
    for bad in ("lost-in-space", "", "SHIPPED"):
        r = await client.put(f"/api/admin/orders/{order.id}/status", json={"orderStatus": bad}, headers=admin_headers)
        assert r.status_code == 422, f"status {bad!r} accepted"
        assert r.json()["code"] == "validation_failure"

    orders = (await client.get("/api/admin/orders", headers=admin_headers)).json()
    assert {o["id"]: o["orderStatus"] for o in orders}[order.id] == "processing"


async def test_update_status_requires_order_status_field(client, admin_headers, seeded):
    order = seeded["orders"][0]
    r = await client.put(f"/api/admin/orders/{order.id}/status", json={}, headers=admin_headers)
    assert r.status_code == 422
    assert "orderStatus" in r.json()["message"]


async def test_update_status_of_missing_order(client, admin_headers, seeded):
    r = await client.put("/api/admin/orders/9999/status", json={"orderStatus": "shipped"}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json() == {"message": "Order not found", "code": "not_found"}


async def test_delete_order_removes_its_items(client, admin_headers, seeded):
    order = seeded["orders"][1]
    r = await client.delete(f"/api/admin/orders/{order.id}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Order deleted successfully"}

    stats = (await client.get("/api/admin/dashboard", headers=admin_headers)).json()
    assert stats["totalOrders"] == 3
    assert stats["totalRevenue"] == 40

    r = await client.delete(f"/api/admin/orders/{order.id}", headers=admin_headers)
    assert r.status_code == 404
