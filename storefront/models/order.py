from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Numeric, func
from sqlalchemy.orm import relationship
from storefront.models.base import Base
import enum


class OrderStatus(str, enum.Enum):
    PROCESSING = "Processing"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_phone = Column(String(32), ForeignKey("users.phone"), nullable=False, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False)

    # Stored as the display value ("Processing"), which clients read directly
    status = Column(String(32), nullable=False, default=OrderStatus.PROCESSING.value)
    payment_method = Column(String(64), nullable=False)

    # Snapshot of the address at order time, independent of users.city
    shipping_address = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    user = relationship("User", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", order_by="OrderItem.id")


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)

    # Snapshot name and price at time of order
    product_name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    order = relationship("Order", back_populates="items")
