"""
FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from api.routes import payments as payments_routes
from api.middleware import RequestIDMiddleware, LoggingMiddleware
from core.config import settings
from core.settings import payment_settings
from core.exceptions import register_exception_handlers
from core.logging_config import get_logger, configure_logging
from domain.services.signature import SignatureVerifier
from infrastructure.audit import FileAuditLog
from infrastructure.catalog import load_catalog
from infrastructure.external.payments import get_payment_gateway


# Configure logging explicitly at the entry point, not as an import side effect
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    # A missing or malformed catalog must abort startup (CatalogLoadError propagates)
    app.state.catalog = load_catalog(settings.catalog.path)
    app.state.audit_log = FileAuditLog(settings.audit.dir)
    app.state.payment_settings = payment_settings
    app.state.signature_verifier = SignatureVerifier(payment_settings.key_secret)
    app.state.gateway = get_payment_gateway(payment_settings)

    if not payment_settings.key_id or not payment_settings.key_secret:
        logger.warning(
            "gateway_credentials_missing",
            message="RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET not set; orders will fail and signatures never verify",
        )
    logger.info(
        "application_started",
        courses=len(app.state.catalog),
        audit_dir=str(app.state.audit_log.base_dir),
        environment=settings.ENVIRONMENT,
    )

    yield

    await app.state.gateway.aclose()
    logger.info("application_shutdown", message="Application shutdown")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    description="Payment relay: course orders, signature verification and gateway callbacks",
)

# Middleware order: the last added runs first
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(payments_routes.router)


@app.get("/", tags=["Health"], response_class=PlainTextResponse)
async def root():
    """Liveness message for the hosting platform's health check"""
    return "Server is up and running!"


@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
