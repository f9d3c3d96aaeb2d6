from fastapi import APIRouter, Depends, Request

from storefront.api.responses import error_response
from storefront.core.errors import StorefrontError
from storefront.crud import user as user_crud
from storefront.db import ConnectionPool, get_pool
from storefront.schemas.user import UserHistory

router = APIRouter()


@router.get("/api/user/{phone}", response_model=UserHistory)
async def get_user_profile(phone: str, request: Request, pool: ConnectionPool = Depends(get_pool)):
    try:
        user, orders = await user_crud.get_user_with_orders(pool, phone)
    except StorefrontError as e:
        return error_response(request, e)
    return {"user": user, "orders": orders}
