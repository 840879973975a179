"""
구독 티어 카탈로그 (정적)
"""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict

TierName = Literal["Free", "Pro", "Business"]


class SubscriptionTier(BaseModel):
    """가격과 기능 한도를 가진 구독 플랜"""
    name: TierName
    price: int
    max_number_of_visits: int
    max_number_of_products: int
    can_remove_branding: bool
    can_access_analytics: bool
    can_customize_banner: bool

    model_config = ConfigDict(frozen=True)


SUBSCRIPTION_TIERS: tuple[SubscriptionTier, ...] = (
    SubscriptionTier(
        name="Free",
        price=0,
        max_number_of_visits=100,
        max_number_of_products=3,
        can_remove_branding=False,
        can_access_analytics=False,
        can_customize_banner=False,
    ),
    SubscriptionTier(
        name="Pro",
        price=1000,
        max_number_of_visits=1000,
        max_number_of_products=100,
        can_remove_branding=True,
        can_access_analytics=True,
        can_customize_banner=True,
    ),
    SubscriptionTier(
        name="Business",
        price=2500,
        max_number_of_visits=10000,
        max_number_of_products=1000,
        can_remove_branding=True,
        can_access_analytics=True,
        can_customize_banner=True,
    ),
)

TIER_NAMES: tuple[str, ...] = tuple(tier.name for tier in SUBSCRIPTION_TIERS)

# 구독 행이 없는 사용자에게 적용되는 티어
DEFAULT_TIER_NAME: TierName = "Pro"


def find_tier(name: Optional[str]) -> Optional[SubscriptionTier]:
    for tier in SUBSCRIPTION_TIERS:
        if tier.name == name:
            return tier
    return None


def is_valid_tier(name: Optional[str]) -> bool:
    return name in TIER_NAMES
