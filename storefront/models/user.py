from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from storefront.models.base import Base


class User(Base):
    """A customer, keyed by phone number. Created or updated on every order."""

    __tablename__ = "users"

    phone = Column(String(32), primary_key=True)
    name = Column(String(255), nullable=False)
    city = Column(String(255), nullable=True)

    orders = relationship("Order", back_populates="user")
