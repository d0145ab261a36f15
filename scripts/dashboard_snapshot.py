"""Print the dashboard counters of a running admin API.

Usage:
    ADMIN_TOKEN=... python scripts/dashboard_snapshot.py [view]

Loads the summary (all lists plus the server stats) and prints the counters
derived from the lists next to the figures the server computed. With a view
name (users, products, orders) the rows of that list are printed too.
"""
import asyncio
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from admin_panel.cache import DashboardController
from admin_panel.client import ADMIN_API_URL, AdminAPIError, AdminClient


async def main(view: str) -> int:
    token = os.getenv("ADMIN_TOKEN")
    if not token:
        print("ADMIN_TOKEN is not set (scripts/seed_demo.py prints one)")
        return 2

    async with AdminClient(token, base_url=ADMIN_API_URL) as client:
        dash = DashboardController(client)
        if not await dash.load_summary():
            print(dash.cache.error)
            return 1

        c = dash.cache.counters
        stats = dash.cache.stats
        print(f"users     {c.users:>6}")
        print(f"customers {c.customers:>6}  (server {stats['totalCustomers']})")
        print(f"sellers   {c.sellers:>6}  (server {stats['totalSellers']})")
        print(f"admins    {c.admins:>6}  (server {stats['totalAdmins']})")
        print(f"products  {c.products:>6}  (server {stats['totalProducts']})")
        print(f"orders    {c.orders:>6}  (server {stats['totalOrders']})")
        print(f"revenue   {dash.cache.revenue:>9.2f}")

        if view != "dashboard":
            try:
                await dash.switch_view(view)
            except AdminAPIError as exc:
                print(f"Failed to load {view}: {exc.message}")
                return 1
            for row in getattr(dash.cache, view):
                print(row)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "dashboard")))
