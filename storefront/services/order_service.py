"""Order placement: customer upsert, order insert and item insert as one unit.

All three writes share one transaction on one pooled connection. Any failure
rolls the whole unit back before the connection goes back to the pool, so
readers never see a customer update without its order, or an order without
its items.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence

from sqlalchemy import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import TransactionalError, ValidationError, describe
from storefront.db import ConnectionPool
from storefront.models.order import Order, OrderItem, OrderStatus
from storefront.models.user import User
from storefront.schemas.order import CustomerIn, OrderItemIn

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacedOrder:
    order_id: int
    success: bool = True


def validate_order(customer: Optional[CustomerIn], items: Optional[Sequence[OrderItemIn]],
                   total: Optional[Decimal], payment_method: Optional[str]) -> None:
    if not customer or not items:
        raise ValidationError()
    if total is None or not payment_method:
        raise ValidationError()


def upsert_user_statement(dialect_name: str, customer: CustomerIn):
    """INSERT ... keyed by phone that overwrites name and city on conflict."""
    values = {"phone": customer.phone, "name": customer.name, "city": customer.address}

    if dialect_name in ("mysql", "mariadb"):
        from sqlalchemy.dialects.mysql import insert as mysql_insert

        stmt = mysql_insert(User).values(**values)
        return stmt.on_duplicate_key_update(name=stmt.inserted.name, city=stmt.inserted.city)

    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert as dialect_insert
    elif dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert as dialect_insert
    else:
        raise NotImplementedError(f"No upsert available for dialect {dialect_name!r}")

    stmt = dialect_insert(User).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=[User.phone],
        set_={"name": stmt.excluded.name, "city": stmt.excluded.city},
    )


def item_rows(order_id: int, items: Sequence[OrderItemIn]) -> List[dict]:
    return [
        {
            "order_id": order_id,
            "product_name": item.name,
            "price": item.price,
            "quantity": item.quantity,
        }
        for item in items
    ]


async def _write_order(db: AsyncSession, upsert, customer: CustomerIn,
                       items: Sequence[OrderItemIn], total: Decimal, payment_method: str) -> int:
    # STEP A: save or update the customer
    await db.execute(upsert)

    # STEP B: the order summary; shipping address is a snapshot of the payload
    order = Order(
        user_phone=customer.phone,
        total_amount=total,
        status=OrderStatus.PROCESSING.value,
        payment_method=payment_method,
        shipping_address=customer.address,
    )
    db.add(order)
    await db.flush()  # populate order.id

    # STEP C: all line items in one bulk write
    await db.execute(insert(OrderItem), item_rows(order.id, items))
    return order.id


async def place_order(pool: ConnectionPool, customer: Optional[CustomerIn],
                      items: Optional[Sequence[OrderItemIn]], total: Optional[Decimal],
                      payment_method: Optional[str]) -> PlacedOrder:
    """Persist a new order atomically and return its generated id.

    Raises ValidationError before touching the store when the request is
    incomplete, PoolExhaustedError/ConnectivityError when no connection can
    be leased, and TransactionalError when any write or the commit fails.
    """
    validate_order(customer, items, total, payment_method)
    try:
        upsert = upsert_user_statement(pool.dialect_name, customer)
    except NotImplementedError as e:
        raise TransactionalError(str(e)) from e

    async with pool.session() as db:
        try:
            await db.begin()
            order_id = await _write_order(db, upsert, customer, items, total, payment_method)
            await db.commit()
        except SQLAlchemyError as e:
            try:
                await db.rollback()
            except SQLAlchemyError:
                # Closing the lease below discards the connection's transaction
                log.exception("Rollback failed for order from %s", customer.phone)
            log.warning("Order for %s rolled back: %s", customer.phone, describe(e))
            raise TransactionalError(describe(e)) from e

    log.info("New order #%s from %s", order_id, customer.name)
    return PlacedOrder(order_id=order_id)
