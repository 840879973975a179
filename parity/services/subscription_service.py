"""
구독 서비스 - 사용자 구독 행 생성/조회/수정 + 캐시 무효화
"""

from __future__ import annotations

from typing import Any, List, Optional
import logging

from pydantic import BaseModel
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from parity.core.database import dialect_insert
from parity.core.cache import CACHE_TAGS, db_cache, get_user_tag, revalidate_db_cache
from parity.core.exceptions import InconsistentStateError, InvalidTierError
from parity.core.tiers import (
    DEFAULT_TIER_NAME,
    SUBSCRIPTION_TIERS,
    SubscriptionTier,
    find_tier,
    is_valid_tier,
)
from parity.models.subscription import UserSubscription
from parity.schemas.subscription import SubscriptionRef, UserSubscriptionRead

logger = logging.getLogger(__name__)


def _values(data: Any) -> dict:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=True)
    return dict(data)


def get_available_subscription_tiers() -> tuple[SubscriptionTier, ...]:
    """전체 티어 목록 (Free, Pro, Business 순서 고정)"""
    return SUBSCRIPTION_TIERS


async def create_user_subscription(db: AsyncSession, data: Any) -> Optional[SubscriptionRef]:
    """구독 생성. 같은 owner id 행이 이미 있으면 아무것도 하지 않고 None을 반환한다."""
    values = _values(data)
    if not is_valid_tier(values.get("tier")):
        raise InvalidTierError(values.get("tier"))

    insert = dialect_insert(db)
    stmt = (
        insert(UserSubscription)
        .values(**values)
        .on_conflict_do_nothing(index_elements=[UserSubscription.clerk_user_id])
        .returning(UserSubscription.id, UserSubscription.clerk_user_id)
    )
    result = await db.execute(stmt)
    row = result.first()
    await db.commit()

    if row is None:
        logger.info(f"subscription already exists for user {values.get('clerk_user_id')}, skipped")
        return None

    await revalidate_db_cache(
        tag=CACHE_TAGS["subscription"],
        id=row.id,
        user_id=row.clerk_user_id,
    )
    return SubscriptionRef(id=row.id, user_id=row.clerk_user_id)


async def _get_user_subscription_internal(db: AsyncSession, user_id: str) -> Optional[UserSubscriptionRead]:
    result = await db.execute(
        select(UserSubscription).where(UserSubscription.clerk_user_id == user_id)
        .execution_options(populate_existing=True)
    )
    sub = result.scalar_one_or_none()
    return UserSubscriptionRead.model_validate(sub) if sub else None


async def get_user_subscription(db: AsyncSession, user_id: str) -> Optional[UserSubscriptionRead]:
    """owner id 기준 구독 조회 (태그 캐시 경유)"""
    cache_fn = db_cache(
        _get_user_subscription_internal,
        tags=[get_user_tag(user_id, CACHE_TAGS["subscription"])],
        schema=Optional[UserSubscriptionRead],
    )
    return await cache_fn(db, user_id)


async def update_user_subscription(
    db: AsyncSession,
    where: ColumnElement[bool],
    data: Any,
) -> List[SubscriptionRef]:
    """조건에 맞는 구독 행 수정. 커밋 후 영향받은 owner id마다 캐시를 무효화한다."""
    values = _values(data)
    if "tier" in values and not is_valid_tier(values["tier"]):
        raise InvalidTierError(values["tier"])
    if not values:
        return []

    previous_owners = []
    if "clerk_user_id" in values:
        # owner id가 바뀌면 이전 owner의 캐시도 무효화해야 한다
        previous_owners = (await db.execute(
            select(UserSubscription.id, UserSubscription.clerk_user_id).where(where)
        )).all()

    stmt = (
        update(UserSubscription)
        .where(where)
        .values(**values)
        .returning(UserSubscription.id, UserSubscription.clerk_user_id)
    )
    result = await db.execute(stmt)
    rows = result.all()
    await db.commit()

    updated = []
    for row in rows:
        await revalidate_db_cache(
            tag=CACHE_TAGS["subscription"],
            id=row.id,
            user_id=row.clerk_user_id,
        )
        updated.append(SubscriptionRef(id=row.id, user_id=row.clerk_user_id))

    current = {(ref.id, ref.user_id) for ref in updated}
    for row in previous_owners:
        if (row.id, row.clerk_user_id) not in current:
            await revalidate_db_cache(
                tag=CACHE_TAGS["subscription"],
                id=row.id,
                user_id=row.clerk_user_id,
            )
    return updated


async def get_user_subscription_tier(db: AsyncSession, user_id: str) -> SubscriptionTier:
    """사용자의 유효 티어. 구독 행이 없으면 Pro."""
    subscription = await get_user_subscription(db, user_id)
    tier_name = subscription.tier if subscription else DEFAULT_TIER_NAME

    tier = find_tier(tier_name)
    if tier is None:
        raise InconsistentStateError(f"Invalid subscription tier in DB: {tier_name!r}")
    return tier
