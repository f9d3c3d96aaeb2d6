from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder

from storefront.api.responses import error_response
from storefront.core.errors import StorefrontError
from storefront.crud import product
from storefront.db import ConnectionPool, get_pool

router = APIRouter()


# No response_model: rows go out with whatever columns the catalog table has
@router.get("/api/products")
async def list_products(request: Request, pool: ConnectionPool = Depends(get_pool)):
    try:
        rows = await product.list_products(pool)
    except StorefrontError as e:
        return error_response(request, e)
    return jsonable_encoder(rows)
