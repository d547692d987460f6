# cart_service/models.py
from pydantic import BaseModel, ConfigDict


class CartEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int


class NotFound(BaseModel):
    """Returned instead of a CartEntry when the product is not in the cart."""
    model_config = ConfigDict(frozen=True)

    product_id: str


class InvalidArgument(ValueError):
    """Raised by the store for a blank product id or a non-positive quantity.

    The store is never mutated when this is raised.
    """
