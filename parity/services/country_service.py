"""
국가 / 국가 그룹 서비스 (조회 + 시드 upsert)
"""

from __future__ import annotations

from typing import List, Optional, Sequence
import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from parity.core.database import dialect_insert
from parity.core.cache import CACHE_TAGS, db_cache, get_global_tag, revalidate_db_cache
from parity.models.country import Country, CountryGroup
from parity.schemas.country import CountryGroupRead, CountryGroupSeed, CountryRead, CountrySeed

logger = logging.getLogger(__name__)


async def _get_country_groups_internal(db: AsyncSession) -> List[CountryGroupRead]:
    groups = (await db.execute(
        select(CountryGroup).order_by(CountryGroup.name)
        .execution_options(populate_existing=True)
    )).scalars().all()
    return [CountryGroupRead.model_validate(g) for g in groups]


async def get_country_groups(db: AsyncSession) -> List[CountryGroupRead]:
    cache_fn = db_cache(
        _get_country_groups_internal,
        tags=[get_global_tag(CACHE_TAGS["country_groups"])],
        schema=List[CountryGroupRead],
    )
    return await cache_fn(db)


async def _get_country_by_code_internal(db: AsyncSession, code: str) -> Optional[CountryRead]:
    result = await db.execute(
        select(Country).where(func.upper(Country.code) == code)
        .execution_options(populate_existing=True)
    )
    country = result.scalar_one_or_none()
    return CountryRead.model_validate(country) if country else None


async def get_country_by_code(db: AsyncSession, code: str) -> Optional[CountryRead]:
    """국가 코드(대소문자 무관)로 조회"""
    cache_fn = db_cache(
        _get_country_by_code_internal,
        tags=[get_global_tag(CACHE_TAGS["countries"])],
        schema=Optional[CountryRead],
    )
    return await cache_fn(db, code.strip().upper())


async def upsert_country_groups(db: AsyncSession, groups: Sequence[CountryGroupSeed]) -> int:
    """이름 기준 upsert. 추천 할인율만 갱신된다."""
    if not groups:
        return 0

    rows = [
        {
            "id": uuid.uuid4(),
            "name": g.name,
            "recommended_discount_percentage": g.recommended_discount_percentage,
        }
        for g in groups
    ]
    stmt = dialect_insert(db)(CountryGroup).values(rows)
    stmt = stmt.on_conflict_do_update(
        index_elements=[CountryGroup.name],
        set_={
            "recommended_discount_percentage": stmt.excluded.recommended_discount_percentage,
            "updated_at": func.now(),
        },
    )
    await db.execute(stmt)
    await db.commit()

    await revalidate_db_cache(tag=CACHE_TAGS["country_groups"])
    logger.info(f"country groups upserted: {len(rows)}")
    return len(rows)


async def upsert_countries(db: AsyncSession, countries: Sequence[CountrySeed]) -> int:
    """국가 코드 기준 upsert. 그룹은 이름으로 찾으며 없으면 ValueError."""
    if not countries:
        return 0

    group_ids = dict((await db.execute(
        select(CountryGroup.name, CountryGroup.id)
    )).all())

    rows = []
    for c in countries:
        group_id = group_ids.get(c.country_group_name)
        if group_id is None:
            raise ValueError(f"존재하지 않는 국가 그룹입니다: {c.country_group_name}")
        rows.append({
            "id": uuid.uuid4(),
            "name": c.name,
            "code": c.code.upper(),
            "country_group_id": group_id,
        })

    stmt = dialect_insert(db)(Country).values(rows)
    stmt = stmt.on_conflict_do_update(
        index_elements=[Country.code],
        set_={
            "name": stmt.excluded.name,
            "country_group_id": stmt.excluded.country_group_id,
            "updated_at": func.now(),
        },
    )
    await db.execute(stmt)
    await db.commit()

    await revalidate_db_cache(tag=CACHE_TAGS["countries"])
    logger.info(f"countries upserted: {len(rows)}")
    return len(rows)
