# cart_service/api.py
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from .core import (
    AddItemIn, UpdateQuantityIn, CartItemOut, CartOut, ApiResponse,
    CheckoutOut, ErrorOut, _make_cart_out
)
from .logger import get_logger
from .models import CartEntry, NotFound
from .orders import CheckoutLedger
from .store import CartStore

log = get_logger("api")

router = APIRouter(prefix="/api/v1/cart", tags=["cart"])


# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> CartStore:
    return request.app.state.cart_store


def get_ledger(request: Request) -> CheckoutLedger:
    return request.app.state.checkout_ledger


def _not_found(product_id: str) -> JSONResponse:
    body = ErrorOut(code="NOT_FOUND", message=f"Product {product_id} not found in cart")
    return JSONResponse(status_code=404, content=body.model_dump())


# ---------------------------
# Cart endpoints
# ---------------------------
@router.get("", response_model=CartOut)
async def get_cart(store: CartStore = Depends(get_store)):
    return _make_cart_out(store.get_all())


@router.post("/items", status_code=201, response_model=CartItemOut)
async def add_item(payload: AddItemIn, store: CartStore = Depends(get_store)):
    log.info("Adding item to cart: product_id=%s, quantity=%s", payload.product_id, payload.quantity)
    entry = store.add_item(payload.product_id, payload.quantity)
    log.info("Item added: product_id=%s, new_quantity=%s", entry.product_id, entry.quantity)
    return CartItemOut(product_id=entry.product_id, quantity=entry.quantity)


@router.get("/items/{product_id:path}", response_model=CartEntry, responses={404: {"model": ErrorOut}})
async def get_item(product_id: str, store: CartStore = Depends(get_store)):
    result = store.get_item(product_id)
    if isinstance(result, NotFound):
        return _not_found(product_id)
    return result


@router.put("/items/{product_id:path}", response_model=ApiResponse, responses={404: {"model": ApiResponse}})
async def update_quantity(product_id: str, payload: UpdateQuantityIn, store: CartStore = Depends(get_store)):
    if payload.quantity == 0:
        return await remove_item(product_id, store)

    result = store.set_quantity(product_id, payload.quantity)
    if isinstance(result, NotFound):
        log.info("Update for missing product_id=%s", product_id)
        body = ApiResponse(success=False, message="Product not found in cart")
        return JSONResponse(status_code=404, content=body.model_dump())
    return ApiResponse(
        success=True,
        message=f"Updated quantity for {product_id} to {result.quantity}",
        item=result,
    )


@router.delete("/items/{product_id:path}", response_model=ApiResponse, responses={404: {"model": ApiResponse}})
async def remove_item(product_id: str, store: CartStore = Depends(get_store)):
    if not store.remove_item(product_id):
        body = ApiResponse(success=False, message="Product not found in cart")
        return JSONResponse(status_code=404, content=body.model_dump())
    log.info("Removed product_id=%s from cart", product_id)
    return ApiResponse(success=True, message=f"Removed {product_id} from cart")


@router.delete("", response_model=ApiResponse)
async def clear_cart(store: CartStore = Depends(get_store)):
    removed = store.drain()
    log.info("Cart cleared, %d items removed", len(removed))
    return ApiResponse(success=True, message=f"Cleared cart ({len(removed)} items removed)")


# ---------------------------
# Checkout
# ---------------------------
@router.post("/checkout", response_model=CheckoutOut, responses={400: {"model": CheckoutOut}})
async def checkout(
    idempotency_key: Optional[str] = Header(None),
    store: CartStore = Depends(get_store),
    ledger: CheckoutLedger = Depends(get_ledger),
):
    result = ledger.checkout(store, idempotency_key)
    if not result.success:
        return JSONResponse(status_code=400, content=result.model_dump())
    log.info("Order %s placed, total=%.2f", result.order_id, result.total)
    return result


@router.get("/health", response_model=ApiResponse)
async def health():
    return ApiResponse(success=True, message="Cart service is healthy")
