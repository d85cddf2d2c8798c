"""FastAPI application for the AfriSight creator analytics API.

Provides REST endpoints for:
- Account signup and login (bearer tokens)
- Predictive music, business and content analysis
- Multi-turn creator chat with per-identity sessions
- Creator directory search and account settings
- Scraped event listings and raw dataset access

Every route except ``/``, ``/health`` and ``/auth/*`` requires a valid
bearer token. Failures use the envelope ``{success: false, error, details?}``.
"""

from typing import Optional

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from afrisight import __version__
from afrisight.analysis import PredictiveAnalysis
from afrisight.auth import CredentialService
from afrisight.chat import ChatSessionStore
from afrisight.datasets import DatasetProvider
from afrisight.errors import AuthenticationError, DirectoryError
from afrisight.events import EventScraper
from afrisight.genai import GenerativeTextGateway
from afrisight.users import UserDirectory
from afrisight.utils.config import Settings, get_settings
from afrisight.utils.logger import LoggerManager
from app.api.dependencies import limiter, require_identity
from app.api.errors import error_body, register_error_handlers
from app.api.models import HealthResponse, ServiceInfo
from app.api.routes import account, ai, auth, chat, data, events, explore, predict

logger = LoggerManager.get_logger("api")

PUBLIC_PATHS = {"/", "/health", "/docs", "/docs/oauth2-redirect", "/redoc", "/openapi.json"}
PUBLIC_PREFIXES = ("/auth/",)


def create_app(
    settings: Optional[Settings] = None,
    user_directory: Optional[UserDirectory] = None,
    gateway: Optional[GenerativeTextGateway] = None,
    datasets: Optional[DatasetProvider] = None,
    scraper: Optional[EventScraper] = None,
    session_store: Optional[ChatSessionStore] = None,
    credentials: Optional[CredentialService] = None,
) -> FastAPI:
    """Build the application and wire its services onto ``app.state``.

    Any service left as None is constructed from ``settings``.

    Args:
        settings: Runtime configuration; resolved from the environment if None
        user_directory: Account store
        gateway: Generative text gateway
        datasets: Static dataset provider
        scraper: Event scraper
        session_store: In-memory chat session store
        credentials: Password hashing and token service

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    LoggerManager.configure(log_dir=settings.log_dir, level=settings.log_level)

    app = FastAPI(
        title="AfriSight API",
        description="Creator analytics with AI-generated insights and multi-turn chat",
        version=__version__,
    )

    # Services
    owns_http_client = scraper is None
    app.state.settings = settings
    app.state.datasets = datasets or DatasetProvider(settings.data_dir)
    app.state.gateway = gateway or GenerativeTextGateway(
        api_key=settings.googleai_api_key, model_name=settings.genai_model
    )
    app.state.analysis = PredictiveAnalysis(app.state.datasets, app.state.gateway)
    app.state.session_store = session_store if session_store is not None else ChatSessionStore(
        max_sessions=settings.max_sessions_per_owner
    )
    app.state.credentials = credentials or CredentialService(
        secret=settings.jwt_secret,
        ttl_hours=settings.jwt_ttl_hours,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    app.state.user_directory = user_directory or UserDirectory.connect(
        settings.mongodb_uri, settings.mongodb_database
    )
    app.state.scraper = scraper or EventScraper(
        httpx.AsyncClient(timeout=30.0, follow_redirects=True)
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Error envelope
    register_error_handlers(app)

    @app.middleware("http")
    async def token_gate(request: Request, call_next):
        """Answer 401 before routing when a non-public path lacks a valid bearer token."""
        path = request.url.path
        if request.method == "OPTIONS" or path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES):
            return await call_next(request)

        scheme, _, token = request.headers.get("Authorization", "").partition(" ")
        try:
            if scheme.lower() != "bearer" or not token.strip():
                raise AuthenticationError("Authorization header missing or malformed")
            app.state.credentials.verify_token(token.strip())
        except AuthenticationError as e:
            return JSONResponse(status_code=401, content=error_body(e.message, e.details))
        return await call_next(request)

    # CORS middleware (outermost, so 401s carry CORS headers too)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def startup_event():
        """Load datasets and verify the user directory before serving."""
        app.state.datasets.load_all()
        app.state.user_directory.ping()
        app.state.user_directory.ensure_indexes()
        logger.info(
            "AfriSight API started",
            extra={"extra_data": {"port": settings.port, "model": settings.genai_model}},
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        if owns_http_client:
            await app.state.scraper.client.aclose()
        logger.info(
            "AfriSight API shutting down",
            extra={"extra_data": {"active_sessions": len(app.state.session_store)}},
        )

    @app.get("/", response_model=ServiceInfo)
    async def root():
        return ServiceInfo(name="AfriSight API", version=__version__, status="running")

    @app.get("/health", response_model=HealthResponse)
    def health_check():
        """Report whether datasets, user directory and session store are usable."""
        try:
            app.state.datasets.get_data_stats()
            datasets_loaded = True
        except (OSError, ValueError) as e:
            logger.warning(f"Dataset health check failed: {e}")
            datasets_loaded = False

        try:
            app.state.user_directory.ping()
            directory_ok = True
        except DirectoryError as e:
            logger.warning(f"User directory health check failed: {e.details}")
            directory_ok = False

        store = app.state.session_store
        store_ok = store is not None

        if datasets_loaded and directory_ok and store_ok:
            status = "healthy"
        elif store_ok:
            status = "degraded"
        else:
            status = "unhealthy"

        return HealthResponse(
            status=status,
            datasets_loaded=datasets_loaded,
            user_directory_ok=directory_ok,
            session_store_ok=store_ok,
            active_sessions=len(store) if store_ok else 0,
        )

    protected = [Depends(require_identity)]
    app.include_router(auth.router)
    app.include_router(predict.router, dependencies=protected)
    app.include_router(chat.router, dependencies=protected)
    app.include_router(explore.router, dependencies=protected)
    app.include_router(account.router, dependencies=protected)
    app.include_router(events.router, dependencies=protected)
    app.include_router(data.router, dependencies=protected)
    app.include_router(ai.router, dependencies=protected)

    return app
