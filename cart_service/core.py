from typing import Optional, Dict, List

from pydantic import BaseModel, Field, field_validator

from .models import CartEntry

# Request / response shapes of the HTTP API. The store only ever sees
# (product_id, quantity); everything here is translated in api.py.


class AddItemIn(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1, strict=True)

    @field_validator("product_id")
    @classmethod
    def _product_id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Product ID is required")
        return v


class UpdateQuantityIn(BaseModel):
    # 0 removes the item, see api.update_quantity
    quantity: int = Field(..., ge=0, strict=True)


class CartItemOut(BaseModel):
    product_id: str
    quantity: int
    success: bool = True


class CartOut(BaseModel):
    items: List[CartEntry]
    total_items: int
    distinct_items: int


class ApiResponse(BaseModel):
    success: bool
    message: str
    item: Optional[CartEntry] = None


class CheckoutOut(BaseModel):
    success: bool
    message: str
    total: float = 0.0
    order_id: Optional[str] = None


class ErrorOut(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, str]] = None


def _make_cart_out(entries: List[CartEntry]) -> CartOut:
    return CartOut(
        items=entries,
        total_items=sum(e.quantity for e in entries),
        distinct_items=len(entries),
    )
