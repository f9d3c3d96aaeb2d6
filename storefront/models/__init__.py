from .base import Base
from .user import User
from .order import Order, OrderItem, OrderStatus
from .product import Product
