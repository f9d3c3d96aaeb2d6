import logging

from sqlalchemy import literal_column
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from storefront.core.errors import DataStoreError, describe
from storefront.db import ConnectionPool
from storefront.models.product import Product

log = logging.getLogger(__name__)


async def list_products(pool: ConnectionPool):
    """All product rows, every column as stored, most recently added first.

    Catalog tables created by earlier deployments carry their own extra
    columns, so rows are passed through rather than mapped onto the model.
    """
    products = Product.__table__
    async with pool.session() as db:
        try:
            result = await db.execute(
                select(literal_column("*")).select_from(products).order_by(products.c.id.desc())
            )
            return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            log.error("Product listing failed: %s", describe(e))
            raise DataStoreError(describe(e)) from e
