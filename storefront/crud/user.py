import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from storefront.core.errors import DataStoreError, NotFoundError, describe
from storefront.db import ConnectionPool
from storefront.models.order import Order
from storefront.models.user import User

log = logging.getLogger(__name__)


async def get_user(pool: ConnectionPool, phone: str):
    async with pool.session() as db:
        result = await db.execute(select(User).where(User.phone == phone))
        return result.scalar_one_or_none()


async def get_orders_for_user(pool: ConnectionPool, phone: str):
    async with pool.session() as db:
        result = await db.execute(
            select(Order)
            .where(Order.user_phone == phone)
            .options(selectinload(Order.items))
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        return result.scalars().all()


async def get_user_with_orders(pool: ConnectionPool, phone: str):
    """Customer row plus their orders, newest first.

    The two reads run on separate leases with no shared transaction, so an
    order committed in between may or may not show up.
    """
    try:
        user = await get_user(pool, phone)
        if not user:
            raise NotFoundError()
        orders = await get_orders_for_user(pool, phone)
    except SQLAlchemyError as e:
        log.error("History lookup for %s failed: %s", phone, describe(e))
        raise DataStoreError(describe(e)) from e
    return user, orders
