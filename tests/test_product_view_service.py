from datetime import datetime, timedelta, timezone

from parity.models import ProductView
from parity.schemas.product import ProductCreate
from parity.services import product_view_service
from parity.services.product_service import create_product
from parity.services.product_view_service import create_product_view, get_product_view_count


async def _product(db, user_id="user_1"):
    return await create_product(
        db, ProductCreate(clerk_user_id=user_id, name="Course", url="https://example.com")
    )


async def test_create_product_view_records_country(db, country_group):
    product = await _product(db)
    country = country_group.countries[0]

    view_id = await create_product_view(db, product.id, country.id, "user_1")
    view = await db.get(ProductView, view_id)
    assert view.product_id == product.id
    assert view.country_id == country.id
    assert view.visited_at is not None


async def test_view_count_is_invalidated_on_new_view(db, monkeypatch, revalidate_spy):
    product = await _product(db)
    since = datetime.now(timezone.utc) - timedelta(days=1)
    assert await get_product_view_count(db, "user_1", since) == 0

    spy = revalidate_spy(monkeypatch, product_view_service)
    await create_product_view(db, product.id, None, "user_1")
    await create_product_view(db, product.id, None, "user_1")

    assert [c["tag"] for c in spy.calls] == ["product-views", "product-views"]
    assert await get_product_view_count(db, "user_1", since) == 2


async def test_view_count_only_counts_owner_products_since_start(db):
    mine = await _product(db, "user_1")
    theirs = await _product(db, "user_2")
    db.add(ProductView(product_id=mine.id, visited_at=datetime(2020, 1, 1)))
    await db.commit()
    await create_product_view(db, mine.id, None, "user_1")
    await create_product_view(db, theirs.id, None, "user_2")

    assert await get_product_view_count(db, "user_1", datetime(2021, 1, 1)) == 1
    assert await get_product_view_count(db, "user_1", datetime(2019, 1, 1)) == 2
    assert await get_product_view_count(db, "user_2", datetime(2019, 1, 1)) == 1
