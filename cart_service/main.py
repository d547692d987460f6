# cart_service/main.py
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .api import router
from .core import ErrorOut
from .logger import setup_logger
from .models import InvalidArgument
from .orders import CheckoutLedger
from .store import CartStore

log = setup_logger()


# ---------------------------
# Error handlers
# ---------------------------
async def _validation_error(request: Request, exc: RequestValidationError):
    details = {}
    for err in exc.errors():
        # loc is ("body", "quantity") / ("path", "product_id") ...
        field = ".".join(str(p) for p in err.get("loc", ())[1:]) or "request"
        details[field] = err.get("msg", "invalid")
    log.warning("Validation error: %s", details)
    body = ErrorOut(code="VALIDATION_ERROR", message="Invalid request data", details=details)
    return JSONResponse(status_code=400, content=body.model_dump())


async def _invalid_argument(request: Request, exc: InvalidArgument):
    log.warning("Illegal argument: %s", exc)
    body = ErrorOut(code="INVALID_REQUEST", message=str(exc))
    return JSONResponse(status_code=400, content=body.model_dump())


async def _unexpected_error(request: Request, exc: Exception):
    log.error("Unexpected error", exc_info=exc)
    body = ErrorOut(code="INTERNAL_ERROR", message="An unexpected error occurred")
    return JSONResponse(status_code=500, content=body.model_dump())


# ---------------------------
# App factory
# ---------------------------
def create_app(store: Optional[CartStore] = None, ledger: Optional[CheckoutLedger] = None) -> FastAPI:
    app = FastAPI(title=config.API_TITLE)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # one store per app; every request handler reaches it through app.state
    app.state.cart_store = store if store is not None else CartStore()
    app.state.checkout_ledger = ledger if ledger is not None else CheckoutLedger(config.CHECKOUT_UNIT_PRICE)

    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(InvalidArgument, _invalid_argument)
    app.add_exception_handler(Exception, _unexpected_error)

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    log.info("Starting cart service on %s:%s", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
