# admin_panel/orders.py
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .auth import require_admin
from .database import get_session
from .errors import NotFound
from .models import Order, OrderItem
from .schemas import Message, OrderOut, OrderStatusResult, OrderStatusUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/orders", tags=["orders"], dependencies=[Depends(require_admin)])


def orders_with_joins():
    # покупатель + товар в каждой позиции
    return select(Order).options(
        selectinload(Order.customer),
        selectinload(Order.items).selectinload(OrderItem.product),
    )


# 🛒 Все заказы
@router.get("", response_model=List[OrderOut])
async def list_orders(session: AsyncSession = Depends(get_session)):
    result = await session.execute(orders_with_joins().order_by(Order.id))
    return result.scalars().all()


# ❌ Удаление заказа (позиции удаляются вместе с ним)
@router.delete("/{order_id}", response_model=Message)
async def delete_order(order_id: int, session: AsyncSession = Depends(get_session)):
    result = await session.execute(delete(Order).where(Order.id == order_id))
    if result.rowcount == 0:
        logger.warning("Delete of missing order %s", order_id)
        raise NotFound("Order not found")
    await session.commit()
    logger.info("Deleted order %s", order_id)
    return {"message": "Order deleted successfully"}


# 🔄 Только статус заказа; последняя запись побеждает
@router.put("/{order_id}/status", response_model=OrderStatusResult)
async def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    session: AsyncSession = Depends(get_session),
):
    order = await session.get(Order, order_id)
    if order is None:
        raise NotFound("Order not found")

    order.order_status = payload.order_status
    await session.commit()

    result = await session.execute(
        orders_with_joins().where(Order.id == order_id).execution_options(populate_existing=True)
    )
    logger.info("Order %s status set to %s", order_id, payload.order_status)
    return {"message": "Order status updated", "order": result.scalar_one()}
