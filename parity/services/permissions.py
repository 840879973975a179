"""
티어 기반 기능 권한 체크
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from parity.services.product_service import get_product_count_for_user
from parity.services.product_view_service import get_product_view_count
from parity.services.subscription_service import get_user_subscription_tier


def start_of_month(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


async def can_remove_branding(db: AsyncSession, user_id: Optional[str]) -> bool:
    if user_id is None:
        return False
    tier = await get_user_subscription_tier(db, user_id)
    return tier.can_remove_branding


async def can_customize_banner(db: AsyncSession, user_id: Optional[str]) -> bool:
    if user_id is None:
        return False
    tier = await get_user_subscription_tier(db, user_id)
    return tier.can_customize_banner


async def can_access_analytics(db: AsyncSession, user_id: Optional[str]) -> bool:
    if user_id is None:
        return False
    tier = await get_user_subscription_tier(db, user_id)
    return tier.can_access_analytics


async def can_create_product(db: AsyncSession, user_id: Optional[str]) -> bool:
    """보유 상품 수가 티어 한도 미만인지"""
    if user_id is None:
        return False
    tier = await get_user_subscription_tier(db, user_id)
    product_count = await get_product_count_for_user(db, user_id)
    return product_count < tier.max_number_of_products


async def can_show_discount_banner(db: AsyncSession, user_id: Optional[str]) -> bool:
    """이번 달 방문 수가 티어 한도 미만인지"""
    if user_id is None:
        return False
    tier = await get_user_subscription_tier(db, user_id)
    view_count = await get_product_view_count(db, user_id, start_of_month())
    return view_count < tier.max_number_of_visits
