# admin_panel/products.py
import logging
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .auth import require_admin
from .database import get_session
from .errors import NotFound
from .models import Product
from .schemas import Message, ProductOut, ProductPriceResult, ProductPriceUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/products", tags=["products"], dependencies=[Depends(require_admin)])


def products_with_seller():
    return select(Product).options(selectinload(Product.seller))


# 📦 Все товары с продавцом (только имя и email)
@router.get("", response_model=List[ProductOut])
async def list_products(session: AsyncSession = Depends(get_session)):
    result = await session.execute(products_with_seller().order_by(Product.id))
    return result.scalars().all()


# ❌ Удаление товара; заказы со ссылкой на него не трогаем
@router.delete("/{product_id}", response_model=Message)
async def delete_product(product_id: int, session: AsyncSession = Depends(get_session)):
    result = await session.execute(delete(Product).where(Product.id == product_id))
    if result.rowcount == 0:
        logger.warning("Delete of missing product %s", product_id)
        raise NotFound("Product not found")
    await session.commit()
    logger.info("Deleted product %s", product_id)
    return {"message": "Product deleted successfully"}


# 💰 Изменение цены
@router.put("/{product_id}/price", response_model=ProductPriceResult)
async def update_product_price(
    product_id: int,
    payload: ProductPriceUpdate,
    session: AsyncSession = Depends(get_session),
):
    product = await session.get(Product, product_id)
    if product is None:
        raise NotFound("Product not found")

    product.price = Decimal(str(payload.price))
    await session.commit()

    result = await session.execute(
        products_with_seller().where(Product.id == product_id).execution_options(populate_existing=True)
    )
    logger.info("Product %s price set to %s", product_id, payload.price)
    return {"message": "Product price updated", "product": result.scalar_one()}
