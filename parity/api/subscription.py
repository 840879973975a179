"""
구독 API - 티어 목록 / 내 구독 / 구독 생성 / 티어 변경
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel
from typing import Optional
import logging

from parity.core.exceptions import InvalidTierError
from parity.core.tiers import SubscriptionTier
from parity.dependencies import get_current_user_id, get_db
from parity.models.subscription import UserSubscription
from parity.schemas.subscription import (
    ChangeTierRequest,
    SubscribeRequest,
    SubscriptionRef,
    UserSubscriptionCreate,
    UserSubscriptionRead,
    UserSubscriptionUpdate,
)
from parity.services import subscription_service

logger = logging.getLogger(__name__)

router = APIRouter()


class MySubscriptionResponse(BaseModel):
    subscription: Optional[UserSubscriptionRead] = None
    tier: SubscriptionTier


@router.get("/tiers", response_model=list[SubscriptionTier])
async def get_tiers():
    """구독 티어 목록 (인증 불필요)"""
    return list(subscription_service.get_available_subscription_tiers())


@router.get("/me", response_model=MySubscriptionResponse)
async def get_my_subscription(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """내 구독 + 유효 티어"""
    subscription = await subscription_service.get_user_subscription(db, user_id)
    tier = await subscription_service.get_user_subscription_tier(db, user_id)
    return MySubscriptionResponse(subscription=subscription, tier=tier)


@router.post("", response_model=SubscriptionRef, status_code=201)
async def subscribe(
    body: SubscribeRequest,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """구독 생성. 이미 구독이 있으면 409."""
    data = UserSubscriptionCreate(clerk_user_id=user_id, **body.model_dump(exclude_unset=True))
    try:
        created = await subscription_service.create_user_subscription(db, data)
    except InvalidTierError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if created is None:
        raise HTTPException(status_code=409, detail="이미 구독이 존재합니다")
    return created


@router.patch("", response_model=SubscriptionRef)
async def change_tier(
    body: ChangeTierRequest,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """내 구독 티어 변경"""
    try:
        updated = await subscription_service.update_user_subscription(
            db,
            UserSubscription.clerk_user_id == user_id,
            UserSubscriptionUpdate(tier=body.tier),
        )
    except InvalidTierError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not updated:
        raise HTTPException(status_code=404, detail="구독 정보가 없습니다")
    logger.info(f"tier changed: user={user_id} tier={body.tier}")
    return updated[0]
