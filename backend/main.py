from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import packages

logger = logging.getLogger("payquote")


def _configure_logging():
    """Attach a stream handler to the app and backend loggers once."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    for name in ("payquote", "backend"):
        logging.getLogger(name).setLevel(level)


_configure_logging()

app = FastAPI(
    title=settings.APP_NAME,
    description="Staffing pay package builder: margin scenarios with GSA per-diem stipends",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(packages.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "pay-package-builder"}


@app.on_event("startup")
def log_startup():
    """Report which per-diem source is in use."""
    source = settings.PER_DIEM_PROXY_URL or settings.GSA_API_URL
    logger.info("Per-diem source: %s (margins %s)", source, settings.MARGIN_SCENARIOS)
    if not settings.PER_DIEM_PROXY_URL and not settings.GSA_API_KEY:
        logger.warning("No GSA_API_KEY set; lookups will likely fall back to standard rates")
