from typing import Literal, TypedDict

from typing_extensions import NotRequired


class Money(TypedDict):
    amount: str
    currencyCode: str


class PriceRange(TypedDict):
    minVariantPrice: Money
    maxVariantPrice: Money


class Image(TypedDict):
    url: str
    altText: NotRequired[str]


class Inventory(TypedDict):
    quantity: int
    policy: Literal["CONTINUE", "DENY"]


class Product(TypedDict):
    """
    A catalog item as returned by the storefront search tool.
    Passed through to the client as-is, never re-validated.
    """
    id: str
    handle: str
    title: str
    description: str
    productType: str
    vendor: str
    tags: list[str]
    priceRange: PriceRange
    featuredImage: NotRequired[Image]
    availableForSale: bool
    inventory: NotRequired[Inventory]
