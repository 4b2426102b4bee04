from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging
import time

from gateway.middleware.error_handler import error_handler_middleware, setup_error_handlers
from gateway.middleware.request_id import RequestIDMiddleware
from gateway.providers.manager import get_manager
from gateway.routers import tomtom_router

logger = logging.getLogger("gateway.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await get_manager().close()


app = FastAPI(
    title="EV Gateway API",
    description="Nearby charging station and POI search over TomTom",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its status and duration."""
    start_time = time.time()
    path = request.url.path
    method = request.method

    skip_logging = path == "/health"

    if not skip_logging:
        logger.info(f"🔔 {method} {path}")

    try:
        response = await call_next(request)

        process_time = time.time() - start_time
        status_code = response.status_code

        if status_code < 400:
            status_str = f"✅ {status_code}"
        elif status_code < 500:
            status_str = f"⚠️ {status_code}"
        else:
            status_str = f"❌ {status_code}"

        if not skip_logging:
            logger.info(f"🏁 {method} {path} - {status_str} - {process_time:.3f}s")
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(f"💥 {method} {path} - Exception: {str(e)} - Time: {process_time:.4f}s")
        raise


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.middleware("http")(error_handler_middleware)

# Outermost, so every log line of the request carries its ID
app.add_middleware(RequestIDMiddleware)

setup_error_handlers(app)

app.include_router(tomtom_router.router, prefix="/api/tomtom", tags=["TomTom"])


@app.get("/")
async def root():
    return {"message": "EV Gateway API"}


@app.get("/health")
async def health_check():
    return {"status": "ok"}
