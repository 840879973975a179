"""
사용자 구독 모델
"""

from sqlalchemy import Column, String, Enum, DateTime, Index, func
import uuid

from parity.core.database import Base, UUID
from parity.core.tiers import TIER_NAMES


TierEnum = Enum(*TIER_NAMES, name="tier")


class UserSubscription(Base):
    """사용자 구독 상태 (owner id 당 1행)"""
    __tablename__ = "user_subscriptions"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    clerk_user_id = Column(String(255), nullable=False, unique=True)
    stripe_subscription_item_id = Column(String(255))
    stripe_subscription_id = Column(String(255))
    stripe_customer_id = Column(String(255))
    tier = Column(TierEnum, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_user_subscriptions_clerk_user_id", "clerk_user_id"),
        Index("ix_user_subscriptions_stripe_customer_id", "stripe_customer_id"),
    )

    def __repr__(self):
        return f"<UserSubscription(clerk_user_id={self.clerk_user_id}, tier={self.tier})>"
