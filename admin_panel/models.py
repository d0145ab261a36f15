from sqlalchemy import (
    Column, Integer, String, ForeignKey, DateTime, func,
    Numeric, CheckConstraint, Index
)
from sqlalchemy.orm import relationship
from .database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default="customer", server_default="customer")

    __table_args__ = (
        Index("ix_users_role", "role"),
    )


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=True)
    image = Column(String(500), nullable=True)
    # a deleted seller leaves the product in place with no owner
    seller_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    seller = relationship("User", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_nonneg"),
        Index("ix_products_seller", "seller_id"),
    )


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    payment_status = Column(String(20), nullable=False, default="unpaid", server_default="unpaid")
    order_status = Column(String(20), nullable=False, default="processing", server_default="processing")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    customer = relationship("User", passive_deletes=True)
    items = relationship(
        "OrderItem", back_populates="order",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_orders_total_nonneg"),
        Index("ix_orders_payment_status", "payment_status"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    # deleting a product does not touch orders; the reference is left dangling
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(10, 2), nullable=False)  # price at purchase time

    order = relationship("Order", back_populates="items", passive_deletes=True)
    product = relationship("Product", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_orderitem_quantity_pos"),
        CheckConstraint("price >= 0", name="ck_orderitem_price_nonneg"),
    )
