# School Fee Tracker - payment tracking API
# Run: python -m uvicorn main:app --reload --port 8000
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, get_settings
from database import RecordStore
from fees.errors import FeesError
from server.accounts import router as accounts_router
from server.admin import router as admin_router
from server.notifications import router as notifications_router
from server.payments import router as payments_router
from server.receipts import router as receipts_router
from server.students import router as students_router

logger = logging.getLogger("fees.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tests install their own store before the app starts
    owns_store = getattr(app.state, "store", None) is None
    if owns_store:
        app.state.store = RecordStore(app.state.settings.database_url)
        await app.state.store.init()
    logger.info("School Fee Tracker starting")
    yield
    if owns_store:
        await app.state.store.close()


async def fees_error_handler(request: Request, exc: FeesError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(e.get("type") == "missing" for e in errors):
        message = "Missing required fields"
    else:
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ())[1:])
        message = f"{field}: {first.get('msg', 'invalid value')}" if field else first.get("msg", "Invalid request")
    return JSONResponse({"error": message}, status_code=400)


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="School Fee Tracker",
        description="Tuition payments, balances, receipts and reminders",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(FeesError, fees_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(accounts_router)
    app.include_router(students_router)
    app.include_router(payments_router)
    app.include_router(receipts_router)
    app.include_router(notifications_router)
    app.include_router(admin_router)
    return app


app = create_app()


if __name__ == "__main__":
    import os
    import uvicorn
    host = os.environ.get("UVICORN_HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run("main:app", host=host, port=port, reload=False)
