"""
상품 API - 상품 CRUD / 배너 커스터마이징 / 국가 그룹별 할인
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid
import logging

from parity.dependencies import get_current_user_id, get_db
from parity.schemas.country import (
    CountryDiscountsRequest,
    CountryGroupDiscountUpsert,
    ProductCountryGroup,
)
from parity.schemas.product import (
    ProductCreate,
    ProductCustomizationRead,
    ProductCustomizationUpdate,
    ProductRead,
    ProductRequest,
    ProductUpdate,
)
from parity.services import permissions, product_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _require_product(db: AsyncSession, product_id: uuid.UUID, user_id: str) -> ProductRead:
    product = await product_service.get_product(db, product_id, user_id)
    if product is None:
        raise HTTPException(status_code=404, detail="상품을 찾을 수 없습니다")
    return product


@router.get("", response_model=list[ProductRead])
async def list_products(
    limit: Optional[int] = Query(None, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await product_service.get_products(db, user_id, limit)


@router.post("", response_model=ProductRead, status_code=201)
async def create_product(
    body: ProductRequest,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """상품 생성 (티어별 상품 수 한도 적용)"""
    if not await permissions.can_create_product(db, user_id):
        raise HTTPException(status_code=403, detail="현재 플랜의 상품 수 한도를 초과했습니다")
    return await product_service.create_product(
        db, ProductCreate(clerk_user_id=user_id, **body.model_dump())
    )


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    product_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await _require_product(db, product_id, user_id)


@router.patch("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: uuid.UUID,
    body: ProductUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await product_service.update_product(
        db, body.model_dump(exclude_unset=True), product_id, user_id
    )
    return await _require_product(db, product_id, user_id)


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    if not await product_service.delete_product(db, product_id, user_id):
        raise HTTPException(status_code=404, detail="상품을 찾을 수 없습니다")
    return Response(status_code=204)


@router.get("/{product_id}/customization", response_model=ProductCustomizationRead)
async def get_customization(
    product_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    customization = await product_service.get_product_customization(db, product_id, user_id)
    if customization is None:
        raise HTTPException(status_code=404, detail="상품을 찾을 수 없습니다")
    return customization


@router.put("/{product_id}/customization", response_model=ProductCustomizationRead)
async def update_customization(
    product_id: uuid.UUID,
    body: ProductCustomizationUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """배너 커스터마이징 수정 (티어 권한 필요)"""
    if not await permissions.can_customize_banner(db, user_id):
        raise HTTPException(status_code=403, detail="현재 플랜에서는 배너를 수정할 수 없습니다")
    await product_service.update_product_customization(
        db, body.model_dump(exclude_unset=True), product_id, user_id
    )
    customization = await product_service.get_product_customization(db, product_id, user_id)
    if customization is None:
        raise HTTPException(status_code=404, detail="상품을 찾을 수 없습니다")
    return customization


@router.get("/{product_id}/country-discounts", response_model=list[ProductCountryGroup])
async def get_country_discounts(
    product_id: uuid.UUID,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await _require_product(db, product_id, user_id)
    return await product_service.get_product_country_groups(db, product_id, user_id)


@router.put("/{product_id}/country-discounts", response_model=list[ProductCountryGroup])
async def update_country_discounts(
    product_id: uuid.UUID,
    body: CountryDiscountsRequest,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """쿠폰+할인율이 있는 그룹은 저장, 비어 있는 그룹은 할인 삭제"""
    await _require_product(db, product_id, user_id)

    delete_group_ids = []
    insert = []
    for entry in body.groups:
        if entry.coupon and entry.discount_percentage is not None:
            insert.append(CountryGroupDiscountUpsert(
                country_group_id=entry.country_group_id,
                coupon=entry.coupon,
                discount_percentage=entry.discount_percentage,
            ))
        else:
            delete_group_ids.append(entry.country_group_id)

    await product_service.update_country_discounts(db, delete_group_ids, insert, product_id, user_id)
    return await product_service.get_product_country_groups(db, product_id, user_id)
