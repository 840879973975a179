"""
상품 방문 기록 서비스
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
import logging
import uuid

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from parity.core.cache import CACHE_TAGS, db_cache, get_user_tag, revalidate_db_cache
from parity.models.product import Product
from parity.models.product_view import ProductView

logger = logging.getLogger(__name__)


async def create_product_view(
    db: AsyncSession,
    product_id: uuid.UUID,
    country_id: Optional[uuid.UUID],
    user_id: str,
) -> uuid.UUID:
    """방문 1건 기록. user_id는 상품 소유자 (캐시 태그용)."""
    result = await db.execute(
        insert(ProductView)
        .values(product_id=product_id, country_id=country_id)
        .returning(ProductView.id)
    )
    view_id = result.scalar_one()
    await db.commit()

    await revalidate_db_cache(tag=CACHE_TAGS["product_views"], user_id=user_id, id=view_id)
    return view_id


async def _get_product_view_count_internal(db: AsyncSession, user_id: str, start_date: datetime) -> int:
    result = await db.execute(
        select(func.count(ProductView.id))
        .select_from(ProductView)
        .join(Product, Product.id == ProductView.product_id)
        .where(Product.clerk_user_id == user_id, ProductView.visited_at >= start_date)
    )
    return result.scalar_one()


async def get_product_view_count(db: AsyncSession, user_id: str, start_date: datetime) -> int:
    """소유자의 전체 상품에 대해 start_date 이후 방문 수"""
    cache_fn = db_cache(
        _get_product_view_count_internal,
        tags=[get_user_tag(user_id, CACHE_TAGS["product_views"])],
        schema=int,
    )
    return await cache_fn(db, user_id, start_date)
