"""
국가 그룹 / 국가 시드 데이터 upsert 스크립트

사용법: python scripts/seed_countries.py countries.json

JSON 형식:
[
  {
    "name": "Group 1",
    "recommended_discount_percentage": 0.1,
    "countries": [{"name": "Germany", "code": "DE"}, ...]
  },
  ...
]
"""

import asyncio
import json
import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from parity.core.database import AsyncSessionLocal  # noqa: E402
from parity.schemas.country import CountryGroupSeed, CountrySeed  # noqa: E402
from parity.services.country_service import upsert_countries, upsert_country_groups  # noqa: E402


def load_seed(path: Path):
    data = json.loads(path.read_text(encoding="utf-8"))
    groups = []
    countries = []
    for group in data:
        groups.append(CountryGroupSeed(
            name=group["name"],
            recommended_discount_percentage=group.get("recommended_discount_percentage"),
        ))
        for country in group.get("countries", []):
            countries.append(CountrySeed(
                name=country["name"],
                code=country["code"],
                country_group_name=group["name"],
            ))
    return groups, countries


async def main(path: Path):
    groups, countries = load_seed(path)
    async with AsyncSessionLocal() as db:
        group_count = await upsert_country_groups(db, groups)
        country_count = await upsert_countries(db, countries)
    print(f"✅ 국가 그룹 {group_count}개, 국가 {country_count}개 반영 완료")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("사용법: python scripts/seed_countries.py <countries.json>")
        sys.exit(1)
    asyncio.run(main(Path(sys.argv[1])))
