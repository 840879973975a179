"""
상품 서비스 - 상품/배너 커스터마이징/국가별 할인 CRUD
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
import logging
import uuid

from pydantic import BaseModel
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from parity.core.database import dialect_insert
from parity.core.cache import (
    CACHE_TAGS,
    db_cache,
    get_global_tag,
    get_id_tag,
    get_user_tag,
    revalidate_db_cache,
)
from parity.models.country import CountryGroup, CountryGroupDiscount
from parity.models.product import Product, ProductCustomization
from parity.schemas.country import (
    CountryGroupDiscountRead,
    CountryGroupDiscountUpsert,
    CountryRead,
    ProductCountryGroup,
)
from parity.schemas.product import ProductCustomizationRead, ProductRead

logger = logging.getLogger(__name__)


def _values(data: Any) -> dict:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=True)
    return dict(data)


# ── 조회 ─────────────────────────────────────────────

async def _get_products_internal(db: AsyncSession, user_id: str, limit: Optional[int]) -> List[ProductRead]:
    stmt = (
        select(Product)
        .where(Product.clerk_user_id == user_id)
        .order_by(Product.created_at.desc())
        .execution_options(populate_existing=True)
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    products = (await db.execute(stmt)).scalars().all()
    return [ProductRead.model_validate(p) for p in products]


async def get_products(db: AsyncSession, user_id: str, limit: Optional[int] = None) -> List[ProductRead]:
    cache_fn = db_cache(
        _get_products_internal,
        tags=[get_user_tag(user_id, CACHE_TAGS["products"])],
        schema=List[ProductRead],
    )
    return await cache_fn(db, user_id, limit)


async def _get_product_internal(db: AsyncSession, id: uuid.UUID, user_id: str) -> Optional[ProductRead]:
    result = await db.execute(
        select(Product).where(Product.id == id, Product.clerk_user_id == user_id)
        .execution_options(populate_existing=True)
    )
    product = result.scalar_one_or_none()
    return ProductRead.model_validate(product) if product else None


async def get_product(db: AsyncSession, id: uuid.UUID, user_id: str) -> Optional[ProductRead]:
    cache_fn = db_cache(
        _get_product_internal,
        tags=[get_id_tag(id, CACHE_TAGS["products"])],
        schema=Optional[ProductRead],
    )
    return await cache_fn(db, id, user_id)


async def _get_product_count_internal(db: AsyncSession, user_id: str) -> int:
    result = await db.execute(
        select(func.count()).select_from(Product).where(Product.clerk_user_id == user_id)
    )
    return result.scalar_one()


async def get_product_count_for_user(db: AsyncSession, user_id: str) -> int:
    cache_fn = db_cache(
        _get_product_count_internal,
        tags=[get_user_tag(user_id, CACHE_TAGS["products"])],
        schema=int,
    )
    return await cache_fn(db, user_id)


async def _get_product_customization_internal(
    db: AsyncSession, product_id: uuid.UUID, user_id: str
) -> Optional[ProductCustomizationRead]:
    result = await db.execute(
        select(ProductCustomization)
        .join(Product, Product.id == ProductCustomization.product_id)
        .where(ProductCustomization.product_id == product_id, Product.clerk_user_id == user_id)
        .execution_options(populate_existing=True)
    )
    customization = result.scalar_one_or_none()
    return ProductCustomizationRead.model_validate(customization) if customization else None


async def get_product_customization(
    db: AsyncSession, product_id: uuid.UUID, user_id: str
) -> Optional[ProductCustomizationRead]:
    cache_fn = db_cache(
        _get_product_customization_internal,
        tags=[get_id_tag(product_id, CACHE_TAGS["products"])],
        schema=Optional[ProductCustomizationRead],
    )
    return await cache_fn(db, product_id, user_id)


async def _get_product_country_groups_internal(
    db: AsyncSession, product_id: uuid.UUID, user_id: str
) -> List[ProductCountryGroup]:
    product = await get_product(db, product_id, user_id)
    if product is None:
        return []

    groups = (await db.execute(
        select(CountryGroup)
        .options(selectinload(CountryGroup.countries))
        .order_by(CountryGroup.name)
        .execution_options(populate_existing=True)
    )).scalars().all()
    discounts = (await db.execute(
        select(CountryGroupDiscount).where(CountryGroupDiscount.product_id == product_id)
        .execution_options(populate_existing=True)
    )).scalars().all()
    by_group = {d.country_group_id: d for d in discounts}

    items = []
    for group in groups:
        discount = by_group.get(group.id)
        items.append(ProductCountryGroup(
            id=group.id,
            name=group.name,
            recommended_discount_percentage=group.recommended_discount_percentage,
            countries=[CountryRead.model_validate(c) for c in sorted(group.countries, key=lambda c: c.name)],
            discount=CountryGroupDiscountRead.model_validate(discount) if discount else None,
        ))
    return items


async def get_product_country_groups(
    db: AsyncSession, product_id: uuid.UUID, user_id: str
) -> List[ProductCountryGroup]:
    """모든 국가 그룹 + 각 그룹에 대한 이 상품의 할인. 남의 상품이면 빈 목록."""
    cache_fn = db_cache(
        _get_product_country_groups_internal,
        tags=[
            get_id_tag(product_id, CACHE_TAGS["products"]),
            get_global_tag(CACHE_TAGS["countries"]),
            get_global_tag(CACHE_TAGS["country_groups"]),
        ],
        schema=List[ProductCountryGroup],
    )
    return await cache_fn(db, product_id, user_id)


# ── 쓰기 ─────────────────────────────────────────────

async def create_product(db: AsyncSession, data: Any) -> ProductRead:
    """상품 생성 + 기본 배너 커스터마이징 1행"""
    product = Product(**_values(data))
    product.customization = ProductCustomization()
    db.add(product)
    await db.commit()
    await db.refresh(product)

    await revalidate_db_cache(
        tag=CACHE_TAGS["products"],
        user_id=product.clerk_user_id,
        id=product.id,
    )
    logger.info(f"product created: {product.id} (user={product.clerk_user_id})")
    return ProductRead.model_validate(product)


async def update_product(db: AsyncSession, data: Any, id: uuid.UUID, user_id: str) -> bool:
    values = _values(data)
    if not values:
        return False

    result = await db.execute(
        update(Product)
        .where(Product.id == id, Product.clerk_user_id == user_id)
        .values(**values)
        .returning(Product.id)
    )
    updated = result.first() is not None
    await db.commit()

    if updated:
        await revalidate_db_cache(tag=CACHE_TAGS["products"], user_id=user_id, id=id)
    return updated


async def delete_product(db: AsyncSession, id: uuid.UUID, user_id: str) -> bool:
    """상품 삭제. 방문 기록/커스터마이징/할인은 DB cascade로 함께 삭제된다."""
    result = await db.execute(
        delete(Product)
        .where(Product.id == id, Product.clerk_user_id == user_id)
        .returning(Product.id)
    )
    deleted = result.first() is not None
    await db.commit()

    if deleted:
        await revalidate_db_cache(tag=CACHE_TAGS["products"], user_id=user_id, id=id)
        await revalidate_db_cache(tag=CACHE_TAGS["product_views"], user_id=user_id)
        logger.info(f"product deleted: {id} (user={user_id})")
    return deleted


async def update_product_customization(
    db: AsyncSession, data: Any, product_id: uuid.UUID, user_id: str
) -> bool:
    product = await get_product(db, product_id, user_id)
    if product is None:
        return False
    values = _values(data)
    if not values:
        return False

    await db.execute(
        update(ProductCustomization)
        .where(ProductCustomization.product_id == product_id)
        .values(**values)
    )
    await db.commit()

    await revalidate_db_cache(tag=CACHE_TAGS["products"], user_id=user_id, id=product_id)
    return True


async def update_country_discounts(
    db: AsyncSession,
    delete_group_ids: Sequence[uuid.UUID],
    insert: Sequence[CountryGroupDiscountUpsert],
    product_id: uuid.UUID,
    user_id: str,
) -> bool:
    """그룹별 할인 삭제 + upsert를 한 트랜잭션으로 처리"""
    product = await get_product(db, product_id, user_id)
    if product is None:
        return False

    if delete_group_ids:
        await db.execute(
            delete(CountryGroupDiscount).where(
                CountryGroupDiscount.product_id == product_id,
                CountryGroupDiscount.country_group_id.in_(list(delete_group_ids)),
            )
        )

    if insert:
        rows: List[Dict[str, Any]] = [
            {
                "product_id": product_id,
                "country_group_id": item.country_group_id,
                "coupon": item.coupon,
                "discount_percentage": item.discount_percentage,
            }
            for item in insert
        ]
        stmt = dialect_insert(db)(CountryGroupDiscount).values(rows)
        stmt = stmt.on_conflict_do_update(
            index_elements=[CountryGroupDiscount.country_group_id, CountryGroupDiscount.product_id],
            set_={
                "coupon": stmt.excluded.coupon,
                "discount_percentage": stmt.excluded.discount_percentage,
                "updated_at": func.now(),
            },
        )
        await db.execute(stmt)

    await db.commit()

    await revalidate_db_cache(tag=CACHE_TAGS["products"], user_id=user_id, id=product_id)
    return True
