from pydantic import BaseModel
from typing import List, Optional

from storefront.schemas.order import OrderRead


class UserRead(BaseModel):
    phone: str
    name: str
    city: Optional[str] = None

    class Config:
        from_attributes = True


class UserHistory(BaseModel):
    user: UserRead
    orders: List[OrderRead] = []
