"""
국가 그룹 API
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from parity.dependencies import get_db
from parity.schemas.country import CountryGroupRead
from parity.services import country_service

router = APIRouter()


@router.get("/groups", response_model=list[CountryGroupRead])
async def list_country_groups(db: AsyncSession = Depends(get_db)):
    return await country_service.get_country_groups(db)
