"""Input validation helpers."""

from __future__ import annotations

from numbers import Real
from typing import Any, Dict, Iterable, Mapping

from core.exceptions import ValidationError


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(data: Mapping[str, Any], fields: Iterable[str], message: str) -> None:
    """Raise ValidationError unless every field is present and non-blank."""
    if any(_is_blank(data.get(name)) for name in fields):
        raise ValidationError(message)


def require_text(data: Mapping[str, Any], name: str, message: str) -> str:
    value = data.get(name)
    if _is_blank(value):
        raise ValidationError(message)
    return str(value).strip() if isinstance(value, str) else str(value)


def validate_subscription(subscription: Any) -> Dict[str, Any]:
    """A browser push subscription must at least carry an endpoint."""
    if not subscription:
        raise ValidationError("Missing subscription object")
    if not isinstance(subscription, dict) or _is_blank(subscription.get("endpoint")):
        raise ValidationError("Missing endpoint in subscription")
    return subscription


def is_price(value: Any) -> bool:
    # bool is a subclass of int
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_menu(data: Any) -> Dict[str, Any]:
    """Validate a menu document and return it in canonical shape.

    Both ``categories`` and ``products`` must be lists; each product needs a
    name, a category and a numeric price.
    """
    if not isinstance(data, dict):
        raise ValidationError("Invalid menu format")
    categories = data.get("categories")
    products = data.get("products")
    if not isinstance(categories, list) or not isinstance(products, list):
        raise ValidationError("Invalid menu format")

    for product in products:
        if (
            not isinstance(product, dict)
            or _is_blank(product.get("name"))
            or _is_blank(product.get("category"))
            or not is_price(product.get("price"))
        ):
            raise ValidationError("Invalid product")

    return {"categories": categories, "products": products}
