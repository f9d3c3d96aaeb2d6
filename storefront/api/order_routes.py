import asyncio

from fastapi import APIRouter, Depends, Request

from storefront.api.responses import error_response
from storefront.core.constants import ORDER_PLACED
from storefront.core.errors import StorefrontError
from storefront.db import ConnectionPool, get_pool
from storefront.schemas.order import OrderCreate, OrderPlaced
from storefront.services.order_service import place_order

router = APIRouter()


@router.post("/api/orders", response_model=OrderPlaced, response_model_by_alias=True)
async def create_order(order: OrderCreate, request: Request, pool: ConnectionPool = Depends(get_pool)):
    # Shielded so a dropped client cannot cancel the transaction mid-step
    try:
        placed = await asyncio.shield(
            place_order(pool, order.customer, order.items, order.total, order.payment_method)
        )
    except StorefrontError as e:
        return error_response(request, e)
    return OrderPlaced(message=ORDER_PLACED, order_id=placed.order_id)
