import os

ENV = os.getenv("ENV", "local")

API_TITLE = os.getenv("CART_API_TITLE", "cart-store (in-memory)")
HOST = os.getenv("CART_HOST", "127.0.0.1")
PORT = int(os.getenv("CART_PORT", "8085"))

# Comma separated, "*" allows everything (as in local development)
CORS_ORIGINS = [o.strip() for o in os.getenv("CART_CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.getenv("CART_LOG_LEVEL", "INFO").upper()

# Flat per-unit price used by checkout
CHECKOUT_UNIT_PRICE = float(os.getenv("CART_CHECKOUT_UNIT_PRICE", "1.00"))

# Where the SDK, CLI and demos look for the service
BASE_URL = os.getenv("CART_BASE_URL", f"http://{HOST}:{PORT}")

# Checkout responses remembered for Idempotency-Key replay (oldest dropped first)
IDEMPOTENCY_MAX_KEYS = int(os.getenv("CART_IDEMPOTENCY_MAX_KEYS", "1024"))
