"""
FastAPI Application Entry Point

Pizza Service - order form, invoice and kitchen view.

Endpoints:
    - GET  /: Start page with the menu and the order form
    - POST /order: Form submission, renders the invoice
    - GET  /kitchen: Kitchen view of the session's current order
    - GET  /api/menu: Menu as JSON
    - POST /api/orders: JSON order submission
    - GET  /api/orders/current: Session's current order as JSON
    - GET  /health: System health check

Version: 1.0.0
"""

import logging
import secrets
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from starlette.middleware.sessions import SessionMiddleware

from pizzaservice.core.config import Settings, get_settings, setup_logging
from pizzaservice.models import Menu, format_money
from pizzaservice.schemas import (
    CUSTOMER_FIELDS,
    CustomerForm,
    ErrorResponse,
    HealthResponse,
    MenuItemResponse,
    OrderResponse,
    OrderSubmission,
)
from pizzaservice.services.catalog import get_menu, provision_menu
from pizzaservice.services.order_store import SessionOrderStore, get_order_store
from pizzaservice.services.ordering import FormSubmission, OrderBuilder, quantity_key

setup_logging()
logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = "session_token"

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.filters["money"] = format_money
templates.env.globals["quantity_key"] = quantity_key


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_session_token(request: Request) -> str:
    """Return the session token, creating one on the first request."""
    token = request.session.get(SESSION_TOKEN_KEY)
    if not token:
        token = secrets.token_hex(16)
        request.session[SESSION_TOKEN_KEY] = token
        logger.debug(f"New session {token}")
    return token


def get_origin_address(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


def _page_context(request: Request, **extra) -> dict:
    settings: Settings = request.app.state.settings
    return {
        "restaurant_name": settings.restaurant_name,
        "currency": settings.currency_symbol,
        **extra,
    }


# =============================================================================
# HTML PAGES
# =============================================================================

router = APIRouter()


@router.get("/", response_class=HTMLResponse, tags=["Pages"])
def start_page(request: Request, menu: Menu = Depends(get_menu)) -> HTMLResponse:
    """Menu with the order form."""
    return templates.TemplateResponse(
        request, "index.html", _page_context(request, menu=menu)
    )


@router.post("/order", response_class=HTMLResponse, tags=["Pages"])
async def submit_order_form(
    request: Request,
    menu: Menu = Depends(get_menu),
    store: SessionOrderStore = Depends(get_order_store),
    session_token: str = Depends(get_session_token),
) -> HTMLResponse:
    """Build an order from the submitted form and render the invoice."""
    form = await request.form()

    try:
        customer_form = CustomerForm.model_validate(
            {name: form.get(name) for name in CUSTOMER_FIELDS}
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))

    submission = FormSubmission(
        values={key: value for key, value in form.items() if isinstance(value, str)},
        origin_address=get_origin_address(request),
        session_token=session_token,
    )
    order = OrderBuilder(menu).build(customer_form.to_customer(), submission)
    store.save(order)

    return templates.TemplateResponse(
        request, "invoice.html", _page_context(request, order=order)
    )


@router.get("/kitchen", response_class=HTMLResponse, tags=["Pages"])
def kitchen_page(
    request: Request,
    store: SessionOrderStore = Depends(get_order_store),
    session_token: str = Depends(get_session_token),
) -> HTMLResponse:
    """Show the current order of this session to the kitchen staff."""
    order = store.get(session_token)
    return templates.TemplateResponse(
        request, "kitchen.html", _page_context(request, order=order)
    )


# =============================================================================
# JSON API
# =============================================================================

@router.get("/api/menu", response_model=list[MenuItemResponse], tags=["Menu"])
def list_menu(menu: Menu = Depends(get_menu)) -> list[MenuItemResponse]:
    """List all menu items in menu order."""
    return [MenuItemResponse.from_item(item) for item in menu.items]


@router.post(
    "/api/orders",
    response_model=OrderResponse,
    tags=["Orders"],
    summary="Submit Order",
)
def submit_order(
    payload: OrderSubmission,
    request: Request,
    menu: Menu = Depends(get_menu),
    store: SessionOrderStore = Depends(get_order_store),
    session_token: str = Depends(get_session_token),
) -> OrderResponse:
    """
    Build and store an order from a JSON submission.

    Blank, non-numeric and non-positive quantities are left out of
    the order; they are not reported as errors.
    """
    submission = payload.to_submission(
        origin_address=get_origin_address(request),
        session_token=session_token,
    )
    order = OrderBuilder(menu).build(payload.customer.to_customer(), submission)
    store.save(order)
    return OrderResponse.from_order(order, request.app.state.settings.currency_symbol)


@router.get(
    "/api/orders/current",
    response_model=OrderResponse,
    responses={404: {"description": "No order in this session"}},
    tags=["Orders"],
)
def current_order(
    request: Request,
    store: SessionOrderStore = Depends(get_order_store),
    session_token: str = Depends(get_session_token),
) -> OrderResponse:
    """Return the last order submitted in this session."""
    order = store.get(session_token)
    if order is None:
        raise HTTPException(status_code=404, detail="No order in this session")
    return OrderResponse.from_order(order, request.app.state.settings.currency_symbol)


@router.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check(
    request: Request,
    menu: Menu = Depends(get_menu),
    store: SessionOrderStore = Depends(get_order_store),
) -> HealthResponse:
    """Report whether the menu is loaded."""
    settings: Settings = request.app.state.settings
    return HealthResponse(
        status="operational" if len(menu) > 0 else "degraded",
        environment=settings.env_mode.value,
        menu_items=len(menu),
        stored_orders=len(store),
        timestamp=datetime.now(timezone.utc),
    )


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to ``get_settings()``)
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("=" * 60)
        logger.info(f"🍕 Starting {settings.app_name}")
        logger.info(f"   Version: {settings.app_version}")
        logger.info(f"   Environment: {settings.env_mode.value}")
        logger.info(f"   Debug: {settings.debug}")
        logger.info("=" * 60)

        provision_menu(app.state)
        app.state.order_store = SessionOrderStore(max_sessions=settings.max_stored_sessions)

        problems = settings.validate_production_config()
        if problems:
            logger.warning(f"⚠️ Insecure configuration: {problems}")

        logger.info("✅ Application ready!")

        yield

        logger.info("🧹 Shutting down, clearing stored orders")
        app.state.order_store.clear()

    app = FastAPI(
        title=settings.app_name,
        description="Order form, invoice and kitchen view for a single restaurant.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret_key,
        session_cookie=settings.session_cookie_name,
        max_age=settings.session_max_age,
        https_only=settings.is_production,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all exception handler."""
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Internal Server Error",
                detail=str(exc) if settings.debug else "An unexpected error occurred",
            ).model_dump(),
        )

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "pizzaservice.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development and settings.debug,
    )


if __name__ == "__main__":
    run()
