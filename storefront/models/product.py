from sqlalchemy import Column, String, Integer, Numeric, Text, DateTime, func
from storefront.models.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(512), nullable=True)
    category = Column(String(100), nullable=True)
    created_at = Column(DateTime, nullable=True, server_default=func.now())
