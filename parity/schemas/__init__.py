"""
스키마 패키지
"""

from .subscription import (
    UserSubscriptionCreate,
    UserSubscriptionUpdate,
    UserSubscriptionRead,
    SubscriptionRef,
)
from .product import (
    ProductCreate,
    ProductUpdate,
    ProductRead,
    ProductCustomizationRead,
    ProductCustomizationUpdate,
)
from .country import (
    CountryRead,
    CountryGroupRead,
    CountryGroupDiscountRead,
    CountryGroupDiscountUpsert,
    ProductCountryGroup,
)

__all__ = [
    "UserSubscriptionCreate",
    "UserSubscriptionUpdate",
    "UserSubscriptionRead",
    "SubscriptionRef",
    "ProductCreate",
    "ProductUpdate",
    "ProductRead",
    "ProductCustomizationRead",
    "ProductCustomizationUpdate",
    "CountryRead",
    "CountryGroupRead",
    "CountryGroupDiscountRead",
    "CountryGroupDiscountUpsert",
    "ProductCountryGroup",
]
