from datetime import datetime, timezone

from parity.models import ProductView
from parity.schemas.product import ProductCreate
from parity.services import permissions
from parity.services.product_service import create_product
from parity.services.subscription_service import create_user_subscription


async def _products(db, user_id, count):
    products = []
    for i in range(count):
        products.append(await create_product(
            db, ProductCreate(clerk_user_id=user_id, name=f"P{i}", url="https://example.com")
        ))
    return products


def test_start_of_month():
    now = datetime(2026, 10, 19, 15, 30, 12, tzinfo=timezone.utc)
    assert permissions.start_of_month(now) == datetime(2026, 10, 1, tzinfo=timezone.utc)


async def test_anonymous_user_has_no_permissions(db):
    assert not await permissions.can_remove_branding(db, None)
    assert not await permissions.can_customize_banner(db, None)
    assert not await permissions.can_access_analytics(db, None)
    assert not await permissions.can_create_product(db, None)
    assert not await permissions.can_show_discount_banner(db, None)


async def test_feature_flags_follow_tier(db):
    await create_user_subscription(db, {"clerk_user_id": "free_user", "tier": "Free"})
    assert not await permissions.can_remove_branding(db, "free_user")
    assert not await permissions.can_customize_banner(db, "free_user")
    assert not await permissions.can_access_analytics(db, "free_user")

    # 구독 행이 없으면 Pro 권한
    assert await permissions.can_remove_branding(db, "unsubscribed")
    assert await permissions.can_customize_banner(db, "unsubscribed")
    assert await permissions.can_access_analytics(db, "unsubscribed")


async def test_can_create_product_respects_tier_limit(db):
    await create_user_subscription(db, {"clerk_user_id": "free_user", "tier": "Free"})
    await _products(db, "free_user", 2)
    assert await permissions.can_create_product(db, "free_user")

    await _products(db, "free_user", 1)
    assert not await permissions.can_create_product(db, "free_user")


async def test_discount_banner_hidden_after_monthly_visit_limit(db):
    await create_user_subscription(db, {"clerk_user_id": "free_user", "tier": "Free"})
    (product,) = await _products(db, "free_user", 1)

    db.add_all([ProductView(product_id=product.id) for _ in range(99)])
    # 지난달 이전 방문은 한도에 포함되지 않는다
    db.add(ProductView(product_id=product.id, visited_at=datetime(2020, 1, 1)))
    await db.commit()
    assert await permissions.can_show_discount_banner(db, "free_user")

    from parity.services.product_view_service import create_product_view
    await create_product_view(db, product.id, None, "free_user")
    assert not await permissions.can_show_discount_banner(db, "free_user")
