"""
구독 관련 스키마
"""

from typing import Optional
from datetime import datetime
import uuid
from pydantic import BaseModel, ConfigDict, Field


class UserSubscriptionCreate(BaseModel):
    clerk_user_id: str = Field(..., min_length=1, max_length=255)
    stripe_subscription_item_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    # 카탈로그 검증은 서비스 계층에서 수행 (InvalidTierError)
    tier: str


class UserSubscriptionUpdate(BaseModel):
    stripe_subscription_item_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    tier: Optional[str] = None


class UserSubscriptionRead(BaseModel):
    id: uuid.UUID
    clerk_user_id: str
    stripe_subscription_item_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    tier: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SubscriptionRef(BaseModel):
    """쓰기 연산이 돌려주는 (id, user_id)"""
    id: uuid.UUID
    user_id: str


class SubscribeRequest(BaseModel):
    tier: str
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    stripe_subscription_item_id: Optional[str] = None


class ChangeTierRequest(BaseModel):
    tier: str
