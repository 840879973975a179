from datetime import datetime

from sqlalchemy import select, update

from parity.models import Country, CountryGroupDiscount, Product, UserSubscription
from parity.schemas.country import CountryGroupDiscountUpsert, CountrySeed
from parity.schemas.product import ProductCreate
from parity.services import product_service
from parity.services.country_service import upsert_countries
from parity.services.subscription_service import create_user_subscription, update_user_subscription

LONG_AGO = datetime(2000, 1, 1)


async def _backdate(db, model, *where):
    await db.execute(update(model).where(*where).values(updated_at=LONG_AGO))
    await db.commit()


async def _updated_at(db, model, *where):
    return (await db.execute(select(model.updated_at).where(*where))).scalar_one()


async def test_update_user_subscription_refreshes_updated_at(db):
    await create_user_subscription(db, {"clerk_user_id": "user_1", "tier": "Free"})
    where = UserSubscription.clerk_user_id == "user_1"
    await _backdate(db, UserSubscription, where)

    await update_user_subscription(db, where, {"tier": "Pro"})
    assert await _updated_at(db, UserSubscription, where) > LONG_AGO


async def test_update_product_refreshes_updated_at(db):
    product = await product_service.create_product(
        db, ProductCreate(clerk_user_id="user_1", name="Course", url="https://example.com")
    )
    assert product.created_at is not None
    await _backdate(db, Product, Product.id == product.id)

    await product_service.update_product(db, {"name": "Renamed"}, product.id, "user_1")
    assert await _updated_at(db, Product, Product.id == product.id) > LONG_AGO


async def test_discount_upsert_refreshes_updated_at(db, country_group):
    product = await product_service.create_product(
        db, ProductCreate(clerk_user_id="user_1", name="Course", url="https://example.com")
    )
    discount = CountryGroupDiscountUpsert(
        country_group_id=country_group.id, coupon="PPP40", discount_percentage=0.4
    )
    await product_service.update_country_discounts(db, [], [discount], product.id, "user_1")
    where = CountryGroupDiscount.product_id == product.id
    await _backdate(db, CountryGroupDiscount, where)

    # 같은 (그룹, 상품) 쌍은 충돌 → 갱신 경로
    discount = discount.model_copy(update={"coupon": "PPP50"})
    await product_service.update_country_discounts(db, [], [discount], product.id, "user_1")
    assert await _updated_at(db, CountryGroupDiscount, where) > LONG_AGO


async def test_country_upsert_refreshes_updated_at(db, country_group):
    where = Country.code == "IN"
    await _backdate(db, Country, where)

    await upsert_countries(db, [CountrySeed(name="India", code="IN", country_group_name="Group A")])
    assert await _updated_at(db, Country, where) > LONG_AGO
