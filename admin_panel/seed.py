# admin_panel/seed.py
# Demo data: 3 customers, 2 sellers, 1 admin, 5 products, 4 orders.
# Paid totals 10 + 20 + 30, one unpaid 100, so revenue is 60.
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from .auth import get_password_hash
from .models import Order, OrderItem, Product, User

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    ("Alice Customer", "alice@example.com", "customer"),
    ("Bob Customer", "bob@example.com", "customer"),
    ("Carol Customer", "carol@example.com", "customer"),
    ("Sam Seller", "sam@example.com", "seller"),
    ("Sue Seller", "sue@example.com", "seller"),
    ("Ada Admin", "admin@example.com", "admin"),
]

# name, price, category, image, seller email
DEMO_PRODUCTS = [
    ("Air filter", "19.90", "engine", "/static/img/air-filter.jpg", "sam@example.com"),
    ("Brake pads", "54.99", "brakes", "/static/img/brake-pads.jpg", "sam@example.com"),
    ("Spark plug", "12.50", "engine", "/static/img/spark-plug.jpg", "sue@example.com"),
    ("Timing belt kit", "129.00", "engine", "/static/img/timing-belt.jpg", "sue@example.com"),
    ("Oil filter", "9.99", "engine", "/static/img/oil-filter.jpg", "sue@example.com"),
]

# customer email, total, payment status, [(product index, quantity, price)]
DEMO_ORDERS = [
    ("alice@example.com", "10", "paid", [(4, 1, "10")]),
    ("bob@example.com", "20", "paid", [(0, 1, "10"), (4, 1, "10")]),
    ("carol@example.com", "30", "paid", [(2, 2, "15")]),
    ("alice@example.com", "100", "unpaid", [(1, 1, "54.99"), (0, 2, "22.50")]),
]


async def seed_demo(session: AsyncSession) -> dict:
    """Insert the demo rows and return them keyed by kind."""
    password_hash = get_password_hash(DEMO_PASSWORD)
    users = {
        email: User(name=name, email=email, role=role, password_hash=password_hash)
        for name, email, role in DEMO_USERS
    }
    session.add_all(users.values())
    await session.flush()

    products = [
        Product(name=name, price=Decimal(price), category=category, image=image, seller_id=users[seller].id)
        for name, price, category, image, seller in DEMO_PRODUCTS
    ]
    session.add_all(products)
    await session.flush()

    orders = []
    for email, total, payment_status, lines in DEMO_ORDERS:
        order = Order(user_id=users[email].id, total_amount=Decimal(total), payment_status=payment_status)
        order.items = [
            OrderItem(product_id=products[idx].id, quantity=qty, price=Decimal(price))
            for idx, qty, price in lines
        ]
        orders.append(order)
    session.add_all(orders)
    await session.commit()

    return {"users": users, "products": products, "orders": orders}
