from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime


# ---------- Incoming order ----------
class CustomerIn(BaseModel):
    phone: str
    name: str
    address: Optional[str] = None


class OrderItemIn(BaseModel):
    name: str
    price: Decimal
    quantity: int = Field(1, ge=1)


class OrderCreate(BaseModel):
    # Everything optional so an incomplete body gets the 400 contract, not a 422
    model_config = ConfigDict(populate_by_name=True)

    customer: Optional[CustomerIn] = None
    items: Optional[List[OrderItemIn]] = None
    total: Optional[Decimal] = None
    payment_method: Optional[str] = Field(None, alias="paymentMethod")


class OrderPlaced(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    order_id: int = Field(alias="orderId")


# ---------- Stored order ----------
class OrderItemRead(BaseModel):
    id: int
    product_name: str
    price: float
    quantity: int

    class Config:
        from_attributes = True


class OrderRead(BaseModel):
    id: int
    user_phone: str
    total_amount: float
    status: str
    payment_method: str
    shipping_address: Optional[str] = None
    created_at: Optional[datetime] = None
    items: List[OrderItemRead] = []

    class Config:
        from_attributes = True
