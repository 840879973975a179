"""
국가 / 국가 그룹 / 그룹별 상품 할인 모델
"""

from sqlalchemy import Column, String, Text, Float, DateTime, ForeignKey, PrimaryKeyConstraint, func
from sqlalchemy.orm import relationship
import uuid

from parity.core.database import Base, UUID


class CountryGroup(Base):
    """구매력 평가(PPP) 기준으로 묶은 국가 그룹"""
    __tablename__ = "country_groups"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, unique=True)
    recommended_discount_percentage = Column(Float)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    countries = relationship(
        "Country", back_populates="country_group",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    country_group_discounts = relationship(
        "CountryGroupDiscount", back_populates="country_group",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    def __repr__(self):
        return f"<CountryGroup(name={self.name})>"


class Country(Base):
    """국가"""
    __tablename__ = "countries"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, unique=True)
    code = Column(String(8), nullable=False, unique=True)
    country_group_id = Column(
        UUID(), ForeignKey("country_groups.id", ondelete="CASCADE"), nullable=False
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    country_group = relationship("CountryGroup", back_populates="countries")

    def __repr__(self):
        return f"<Country(code={self.code}, name={self.name})>"


class CountryGroupDiscount(Base):
    """상품 x 국가 그룹 쿠폰 할인 (쌍마다 1행)"""
    __tablename__ = "country_group_discounts"

    country_group_id = Column(
        UUID(), ForeignKey("country_groups.id", ondelete="CASCADE"), nullable=False
    )
    product_id = Column(UUID(), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    coupon = Column(Text, nullable=False)
    discount_percentage = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        PrimaryKeyConstraint("country_group_id", "product_id"),
    )

    country_group = relationship("CountryGroup", back_populates="country_group_discounts")
    product = relationship("Product", back_populates="country_group_discounts")

    def __repr__(self):
        return f"<CountryGroupDiscount(country_group_id={self.country_group_id}, product_id={self.product_id})>"
