# admin_panel/schemas.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

Role = Literal["customer", "seller", "admin"]
OrderStatus = Literal["processing", "shipped", "delivered", "cancelled"]


class CamelModel(BaseModel):
    """Base for everything on the wire: camelCase keys, built from ORM rows."""

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


# 👤 Users
class UserOut(CamelModel):
    id: int
    name: str
    email: str
    role: str


class UserRef(CamelModel):
    """Joined view of a user: identity, name and email only."""
    id: int
    name: str
    email: str


class UserRoleUpdate(CamelModel):
    role: Role


class UserRoleResult(CamelModel):
    message: str
    user: UserOut


# 🛍️ Products
class ProductOut(CamelModel):
    id: int
    name: str
    price: float
    category: Optional[str] = None
    image: Optional[str] = None
    seller_id: Optional[int] = None
    seller: Optional[UserRef] = None


class ProductRef(CamelModel):
    id: int
    name: str
    image: Optional[str] = None
    price: float


class ProductPriceUpdate(CamelModel):
    price: float = Field(..., ge=0, lt=10**8, allow_inf_nan=False)


class ProductPriceResult(CamelModel):
    message: str
    product: ProductOut


# 📦 Orders
class OrderItemOut(CamelModel):
    id: int
    product_id: Optional[int] = None
    product: Optional[ProductRef] = None
    quantity: int
    price: float


class OrderOut(CamelModel):
    id: int
    user_id: Optional[int] = None
    customer: Optional[UserRef] = None
    items: List[OrderItemOut] = []
    total_amount: float
    payment_status: str
    order_status: str
    created_at: Optional[datetime] = None


class OrderStatusUpdate(CamelModel):
    order_status: OrderStatus


class OrderStatusResult(CamelModel):
    message: str
    order: OrderOut


# 📊 Dashboard
class DashboardStats(CamelModel):
    total_customers: int
    total_sellers: int
    total_admins: int
    total_products: int
    total_orders: int
    total_revenue: float


class Message(CamelModel):
    message: str
