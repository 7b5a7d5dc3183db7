"""Product field validation."""

import math
from dataclasses import dataclass
from typing import Any

PRODUCT_FIELDS = ("name", "description", "price", "sell", "image")


@dataclass(frozen=True)
class ProductValidationError:
    field: str
    message: str
    code: str


class ProductValidator:
    """Validates product data for creation and partial updates."""

    NAME_MAX_LENGTH = 255

    def validate(self, data: dict[str, Any], partial: bool = False) -> list[ProductValidationError]:
        """Validate product fields in declaration order.

        Args:
            data: Field values keyed by name.
            partial: When True only the supplied fields are checked.

        Returns:
            List of validation errors. Empty list if the data is valid.
        """
        errors: list[ProductValidationError] = []
        for field in PRODUCT_FIELDS:
            if field not in data or data[field] is None:
                if not partial:
                    errors.append(
                        ProductValidationError(field, f"Product {field} is required", f"{field}_required")
                    )
                continue
            errors.extend(getattr(self, f"_check_{field}")(data[field]))
        return errors

    def _check_name(self, value: Any) -> list[ProductValidationError]:
        if not isinstance(value, str) or not value.strip():
            return [ProductValidationError("name", "Product name is required", "name_required")]
        if len(value) > self.NAME_MAX_LENGTH:
            return [
                ProductValidationError(
                    "name",
                    f"Product name must be at most {self.NAME_MAX_LENGTH} characters",
                    "name_length",
                )
            ]
        return []

    def _check_description(self, value: Any) -> list[ProductValidationError]:
        if not isinstance(value, str) or not value.strip():
            return [
                ProductValidationError(
                    "description", "Product description is required", "description_required"
                )
            ]
        return []

    def _check_price(self, value: Any) -> list[ProductValidationError]:
        if (
            isinstance(value, bool)
            or not isinstance(value, (int, float))
            or not math.isfinite(value)
        ):
            return [ProductValidationError("price", "Product price must be a number", "price_type")]
        if value < 0:
            return [ProductValidationError("price", "Product price cannot be negative", "price_negative")]
        return []

    def _check_sell(self, value: Any) -> list[ProductValidationError]:
        if not isinstance(value, bool):
            return [ProductValidationError("sell", "Product sale status is invalid", "sell_type")]
        return []

    def _check_image(self, value: Any) -> list[ProductValidationError]:
        if not isinstance(value, str) or not value:
            return [ProductValidationError("image", "Product image is required", "image_required")]
        return []


# Default validator instance
default_product_validator = ProductValidator()
