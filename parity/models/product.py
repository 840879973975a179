"""
상품 / 배너 커스터마이징 모델
"""

from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
import uuid

from parity.core.database import Base, UUID


DEFAULT_LOCATION_MESSAGE = (
    "Hey! It looks like you are from <b>{country}</b>. We support Parity Purchasing Power, "
    "so if you need it, use code <b>\"{coupon}\"</b> to get <b>{discount}%</b> off."
)


class Product(Base):
    """상품 모델"""
    __tablename__ = "products"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    clerk_user_id = Column(String(255), nullable=False, index=True)
    name = Column(Text, nullable=False)
    url = Column(Text, nullable=False)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # 관계 설정 (삭제는 DB의 ON DELETE CASCADE에 맡김)
    customization = relationship(
        "ProductCustomization", back_populates="product", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )
    views = relationship(
        "ProductView", back_populates="product",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    country_group_discounts = relationship(
        "CountryGroupDiscount", back_populates="product",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name={self.name})>"


class ProductCustomization(Base):
    """상품별 할인 배너 스타일 (상품당 1개)"""
    __tablename__ = "product_customizations"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    class_prefix = Column(Text)
    product_id = Column(
        UUID(), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    location_message = Column(Text, nullable=False, default=DEFAULT_LOCATION_MESSAGE)
    background_color = Column(Text, nullable=False, default="hsl(193, 82%, 31%)")
    text_color = Column(Text, nullable=False, default="hsl(0, 0%, 100%)")
    font_size = Column(Text, nullable=False, default="1rem")
    banner_container = Column(Text, nullable=False, default="body")
    is_sticky = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    product = relationship("Product", back_populates="customization")

    def __repr__(self):
        return f"<ProductCustomization(product_id={self.product_id})>"
