"""
상품 관련 스키마
"""

from typing import Optional
from datetime import datetime
import uuid
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    description: Optional[str] = None


class ProductCreate(ProductBase):
    clerk_user_id: str = Field(..., min_length=1, max_length=255)


class ProductRequest(ProductBase):
    """HTTP 요청 본문 (owner id는 헤더에서)"""
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    url: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None

    @field_validator("name", "url")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("null로 변경할 수 없는 필드입니다")
        return v


class ProductRead(ProductBase):
    id: uuid.UUID
    clerk_user_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProductCustomizationRead(BaseModel):
    id: uuid.UUID
    product_id: uuid.UUID
    class_prefix: Optional[str] = None
    location_message: str
    background_color: str
    text_color: str
    font_size: str
    banner_container: str
    is_sticky: bool

    model_config = ConfigDict(from_attributes=True)


class ProductCustomizationUpdate(BaseModel):
    class_prefix: Optional[str] = None
    location_message: Optional[str] = Field(None, min_length=1)
    background_color: Optional[str] = Field(None, min_length=1)
    text_color: Optional[str] = Field(None, min_length=1)
    font_size: Optional[str] = Field(None, min_length=1)
    banner_container: Optional[str] = Field(None, min_length=1)
    is_sticky: Optional[bool] = None

    @field_validator(
        "location_message", "background_color", "text_color",
        "font_size", "banner_container", "is_sticky",
    )
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("null로 변경할 수 없는 필드입니다")
        return v
