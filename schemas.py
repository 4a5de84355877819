"""
Pydantic models for validating prices and brand payloads.

Prices are non-negative integers in the smallest display unit (won), bounded
by MAX_PRICE.
Strict types are used so that bools, floats and numeric strings are rejected
rather than silently coerced.
"""

from typing import Annotated, Dict, Mapping, Optional, Union

from pydantic import BaseModel, Field, StrictInt, StrictStr, ValidationError

from categories import Category, resolve_category
from errors import InvalidInput

# Prices are stored in an Integer column
MAX_PRICE = 2**31 - 1

Amount = Annotated[StrictInt, Field(ge=0, le=MAX_PRICE)]


class PriceInput(BaseModel):
    amount: Amount


class BrandInput(BaseModel):
    """Brand name plus an optional partial price map"""
    name: StrictStr
    prices: Dict[Category, Amount] = Field(default_factory=dict)

    model_config = {"frozen": True}


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def validate_amount(amount: object) -> int:
    """
    Validate a single price.

    Raises:
        InvalidInput: If amount is not an integer in [0, MAX_PRICE]
    """
    try:
        return PriceInput(amount=amount).amount
    except ValidationError as e:
        raise InvalidInput(f"잘못된 가격: {amount!r} ({_describe(e)})") from e


def validate_brand_input(
    name: object,
    prices: Optional[Mapping[Union[Category, str], object]] = None,
) -> BrandInput:
    """
    Validate a brand payload.

    Price-map keys may be Category members, labels or identifiers; an unknown
    key raises UnknownCategory before any value is checked.

    Raises:
        UnknownCategory: If a price-map key does not resolve
        InvalidInput: If the name is not a string or any price is invalid
    """
    if prices is not None and not isinstance(prices, Mapping):
        raise InvalidInput(f"잘못된 가격 정보: {prices!r}")

    resolved = {resolve_category(key): value for key, value in (prices or {}).items()}
    try:
        return BrandInput(name=name, prices=resolved)
    except ValidationError as e:
        raise InvalidInput(f"잘못된 브랜드 정보 ({_describe(e)})") from e


def entered_prices(values: Mapping[str, Optional[int]]) -> Dict[str, int]:
    """Keep only the filled-in price fields of a form; an empty field means not sold."""
    return {key: int(value) for key, value in values.items() if value is not None}
