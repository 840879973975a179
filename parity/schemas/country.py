"""
국가 / 국가 그룹 / 할인 스키마
"""

from typing import Optional, List
import uuid
from pydantic import BaseModel, ConfigDict, Field, model_validator


class CountryRead(BaseModel):
    id: uuid.UUID
    name: str
    code: str

    model_config = ConfigDict(from_attributes=True)


class CountryGroupRead(BaseModel):
    id: uuid.UUID
    name: str
    recommended_discount_percentage: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class CountryGroupDiscountRead(BaseModel):
    coupon: str
    discount_percentage: float

    model_config = ConfigDict(from_attributes=True)


class ProductCountryGroup(CountryGroupRead):
    """상품 관점의 국가 그룹: 소속 국가 + 이 상품의 할인(없으면 None)"""
    countries: List[CountryRead] = []
    discount: Optional[CountryGroupDiscountRead] = None


class CountryGroupDiscountUpsert(BaseModel):
    country_group_id: uuid.UUID
    coupon: str = Field(..., min_length=1)
    discount_percentage: float = Field(..., ge=0, le=1)


class CountryDiscountEntry(BaseModel):
    """쿠폰과 할인율이 모두 있으면 저장, 둘 다 없으면 삭제"""
    country_group_id: uuid.UUID
    coupon: Optional[str] = None
    discount_percentage: Optional[float] = Field(None, ge=0, le=1)

    @model_validator(mode="after")
    def _both_or_neither(self):
        has_coupon = bool(self.coupon)
        has_discount = self.discount_percentage is not None
        if has_coupon != has_discount:
            raise ValueError("coupon과 discount_percentage는 함께 입력해야 합니다")
        return self


class CountryDiscountsRequest(BaseModel):
    groups: List[CountryDiscountEntry]


class CountryGroupSeed(BaseModel):
    name: str
    recommended_discount_percentage: Optional[float] = None


class CountrySeed(BaseModel):
    name: str
    code: str = Field(..., min_length=2, max_length=8)
    country_group_name: str
