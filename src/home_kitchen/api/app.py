"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import (
    BackgroundTasks,
    Depends,
    FastAPI,
    HTTPException,
    Request,
    Response,
    status,
)
from fastapi.responses import HTMLResponse, JSONResponse

from home_kitchen.api.admin import router as admin_router
from home_kitchen.api.schemas import (
    AddToCartIn,
    CartOut,
    CheckoutIn,
    DishOut,
    MenuOut,
    QuantityChangeIn,
)
from home_kitchen.api.views import (
    STOREFRONT_HTML,
    render_cart_drawer,
    render_menu_grid,
)
from home_kitchen.app_logging import configure_logging
from home_kitchen.containers import AppContainer
from home_kitchen.domain.checkout import ContactDetails
from home_kitchen.domain.errors import (
    AuthenticationError,
    CheckoutStateError,
    DishWriteError,
    StorefrontError,
)
from home_kitchen.services.orders import THANK_YOU_MESSAGE
from home_kitchen.services.shoppers import ShopperSession

SHOPPER_COOKIE = "hk_shopper"

_ERROR_STATUS: dict[type[StorefrontError], int] = {
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    CheckoutStateError: status.HTTP_409_CONFLICT,
    DishWriteError: status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level.upper())
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.start_resources()
        except Exception:
            logger.exception("Failed to subscribe to the dish feed")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(StorefrontError)
    async def storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
        state_container: AppContainer = request.app.state.container
        body: dict[str, object] = {"detail": _format_error(state_container, exc)}
        missing = getattr(exc, "missing_fields", None)
        if missing:
            body["missing_fields"] = missing
        return JSONResponse(
            status_code=_ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST),
            content=body,
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def storefront() -> HTMLResponse:
        """Storefront shell that loads menu and cart fragments."""
        return HTMLResponse(STOREFRONT_HTML)

    @app.get("/api/menu")
    async def menu(request: Request, category: str | None = None) -> MenuOut:
        """Return orderable dishes from the live menu cache."""
        menu_cache = request.app.state.container.menu_cache
        return MenuOut(
            version=menu_cache.version,
            stale=menu_cache.is_stale,
            dishes=[DishOut.from_dish(dish) for dish in menu_cache.visible(category)],
        )

    @app.get("/api/menu/version")
    async def menu_version(request: Request) -> dict[str, object]:
        """Return the snapshot counter so the browser can detect changes."""
        menu_cache = request.app.state.container.menu_cache
        return {"version": menu_cache.version, "stale": menu_cache.is_stale}

    @app.get("/fragments/menu", response_class=HTMLResponse)
    async def menu_fragment(request: Request, category: str | None = None) -> str:
        menu_cache = request.app.state.container.menu_cache
        return render_menu_grid(menu_cache.visible(category), category)

    @app.get("/fragments/cart", response_class=HTMLResponse)
    async def cart_fragment(shopper: ShopperSession = Depends(get_shopper)) -> str:
        return render_cart_drawer(shopper.cart, shopper.checkout.state)

    @app.get("/api/cart")
    async def cart(shopper: ShopperSession = Depends(get_shopper)) -> CartOut:
        """Return the shopper's cart."""
        return _cart_out(shopper)

    @app.post("/api/cart/items")
    async def add_to_cart(
        body: AddToCartIn,
        request: Request,
        shopper: ShopperSession = Depends(get_shopper),
    ) -> CartOut:
        """Add one unit of an orderable dish to the cart."""
        dish = request.app.state.container.menu_cache.find(body.dish_id)
        if dish is None or not dish.is_available:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        shopper.cart.add(dish)
        return _cart_out(shopper)

    @app.patch("/api/cart/items/{dish_id}")
    async def change_quantity(
        dish_id: str,
        body: QuantityChangeIn,
        shopper: ShopperSession = Depends(get_shopper),
    ) -> CartOut:
        """Shift a line quantity, never below one."""
        shopper.cart.update_quantity(dish_id, body.delta)
        return _cart_out(shopper)

    @app.delete("/api/cart/items/{dish_id}")
    async def remove_from_cart(
        dish_id: str, shopper: ShopperSession = Depends(get_shopper)
    ) -> CartOut:
        """Remove a line from the cart."""
        shopper.cart.remove(dish_id)
        return _cart_out(shopper)

    @app.post("/api/checkout/start")
    async def checkout_start(
        request: Request, shopper: ShopperSession = Depends(get_shopper)
    ) -> CartOut:
        """Move the shopper to the checkout form."""
        request.app.state.container.checkout_service.begin(shopper)
        return _cart_out(shopper)

    @app.post("/api/checkout/cancel")
    async def checkout_cancel(
        request: Request, shopper: ShopperSession = Depends(get_shopper)
    ) -> CartOut:
        """Go back from the checkout form to the cart."""
        request.app.state.container.checkout_service.cancel(shopper)
        return _cart_out(shopper)

    @app.post("/api/checkout/submit")
    async def checkout_submit(
        body: CheckoutIn,
        request: Request,
        background_tasks: BackgroundTasks,
        shopper: ShopperSession = Depends(get_shopper),
    ) -> dict[str, object]:
        """Submit the order and hand it to the intake in the background."""
        checkout_service = request.app.state.container.checkout_service
        payload = checkout_service.submit(
            shopper,
            ContactDetails(name=body.name, phone=body.phone, address=body.address),
        )
        background_tasks.add_task(checkout_service.dispatch, payload)
        return {
            "status": "ok",
            "message": THANK_YOU_MESSAGE,
            "total": payload.total,
            "cart": _cart_out(shopper).model_dump(mode="json"),
        }

    return app


async def get_shopper(request: Request, response: Response) -> ShopperSession:
    """Resolve the shopper session from its cookie, issuing one if needed.

    Runs on the event loop so the session store has a single writer.
    """
    container: AppContainer = request.app.state.container
    cookie = request.cookies.get(SHOPPER_COOKIE)
    shopper = container.shopper_sessions.get_or_create(cookie)
    if shopper.id != cookie:
        response.set_cookie(SHOPPER_COOKIE, shopper.id, httponly=True, samesite="lax")
    return shopper


def _cart_out(shopper: ShopperSession) -> CartOut:
    return CartOut.from_cart(shopper.cart, shopper.checkout.state)


def _format_error(state_container: AppContainer, exc: StorefrontError) -> str:
    """Return a user-facing error message with local debug info."""
    cause = exc.__cause__
    if state_container.settings.environment == "local" and cause is not None:
        detail = f"{type(cause).__name__}: {cause}".strip()
        if detail:
            return f"{exc.user_message} (debug: {detail})"
    return exc.user_message
