import pytest

from parity.schemas.country import CountryGroupSeed, CountrySeed
from parity.services.country_service import (
    get_country_by_code,
    get_country_groups,
    upsert_countries,
    upsert_country_groups,
)


async def test_upsert_country_groups_is_idempotent(db):
    assert await get_country_groups(db) == []

    await upsert_country_groups(db, [
        CountryGroupSeed(name="Group B", recommended_discount_percentage=0.2),
        CountryGroupSeed(name="Group A", recommended_discount_percentage=0.4),
    ])
    await upsert_country_groups(db, [CountryGroupSeed(name="Group A", recommended_discount_percentage=0.5)])

    groups = await get_country_groups(db)
    assert [g.name for g in groups] == ["Group A", "Group B"]
    assert groups[0].recommended_discount_percentage == pytest.approx(0.5)


async def test_upsert_countries_and_lookup_by_code(db):
    await upsert_country_groups(db, [CountryGroupSeed(name="Group A"), CountryGroupSeed(name="Group B")])
    assert await get_country_by_code(db, "in") is None

    await upsert_countries(db, [
        CountrySeed(name="India", code="in", country_group_name="Group A"),
        CountrySeed(name="Brazil", code="BR", country_group_name="Group A"),
    ])
    india = await get_country_by_code(db, "in")
    assert india.name == "India"
    assert india.code == "IN"

    # 같은 코드는 갱신
    await upsert_countries(db, [CountrySeed(name="Republic of India", code="IN", country_group_name="Group B")])
    assert (await get_country_by_code(db, "IN")).name == "Republic of India"


async def test_upsert_countries_with_unknown_group_fails(db):
    with pytest.raises(ValueError):
        await upsert_countries(db, [CountrySeed(name="Nowhere", code="NW", country_group_name="Missing")])


async def test_empty_upserts(db):
    assert await upsert_country_groups(db, []) == 0
    assert await upsert_countries(db, []) == 0
