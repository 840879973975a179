"""
모델 패키지
"""

from .product import Product, ProductCustomization
from .product_view import ProductView
from .country import Country, CountryGroup, CountryGroupDiscount
from .subscription import UserSubscription, TierEnum

__all__ = [
    "Product",
    "ProductCustomization",
    "ProductView",
    "Country",
    "CountryGroup",
    "CountryGroupDiscount",
    "UserSubscription",
    "TierEnum",
]
