# admin_panel/stats.py
# Counts run on separate sessions and are awaited together; no atomicity across
# them, each may see the store at a slightly different instant.
import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from .models import Order, Product, User
from .schemas import DashboardStats

logger = logging.getLogger(__name__)


async def _scalar(session_maker: sessionmaker, stmt):
    async with session_maker() as session:
        result = await session.execute(stmt)
        return result.scalar_one()


def _count(model, *where):
    return select(func.count()).select_from(model).where(*where)


def paid_revenue_query():
    # coalesce: an empty paid group reports 0, never NULL
    return select(func.coalesce(func.sum(Order.total_amount), 0)).where(Order.payment_status == "paid")


async def compute_dashboard_stats(session_maker: sessionmaker) -> DashboardStats:
    # any failing query propagates and aborts the whole computation
    customers, sellers, admins, products, orders, revenue = await asyncio.gather(
        _scalar(session_maker, _count(User, User.role == "customer")),
        _scalar(session_maker, _count(User, User.role == "seller")),
        _scalar(session_maker, _count(User, User.role == "admin")),
        _scalar(session_maker, _count(Product)),
        _scalar(session_maker, _count(Order)),
        _scalar(session_maker, paid_revenue_query()),
    )
    stats = DashboardStats(
        total_customers=customers,
        total_sellers=sellers,
        total_admins=admins,
        total_products=products,
        total_orders=orders,
        total_revenue=float(revenue),
    )
    logger.debug("Dashboard stats computed: %s", stats)
    return stats
