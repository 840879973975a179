"""
상품 방문 기록 모델
"""

from sqlalchemy import Column, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
import uuid

from parity.core.database import Base, UUID


class ProductView(Base):
    """방문 이벤트마다 한 행"""
    __tablename__ = "product_views"

    id = Column(UUID(), primary_key=True, default=uuid.uuid4)
    product_id = Column(UUID(), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    country_id = Column(UUID(), ForeignKey("countries.id", ondelete="CASCADE"), nullable=True)
    visited_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    product = relationship("Product", back_populates="views")
    country = relationship("Country")

    def __repr__(self):
        return f"<ProductView(product_id={self.product_id}, country_id={self.country_id})>"
