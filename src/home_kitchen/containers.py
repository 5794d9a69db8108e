"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from home_kitchen.adapters.supabase_auth_client import SupabaseAuthClient
from home_kitchen.adapters.supabase_dish_repository import SupabaseDishRepository
from home_kitchen.adapters.supabase_image_storage import SupabaseImageStorage
from home_kitchen.adapters.supabase_menu_feed import SupabaseRealtimeMenuFeed
from home_kitchen.adapters.webhook_order_intake import HttpxWebhookOrderIntake
from home_kitchen.config import Settings, parse_admin_emails
from home_kitchen.domain.auth import AuthSession
from home_kitchen.domain.menu import Dish
from home_kitchen.services.auth import AuthService
from home_kitchen.services.menu_admin import MenuAdminService
from home_kitchen.services.menu_cache import MenuCache
from home_kitchen.services.orders import (
    CheckoutService,
    LoggingOrderIntake,
    OrderIntake,
)
from home_kitchen.services.shoppers import (
    InMemoryShopperSessionStore,
    ShopperSessionStore,
)

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    menu_cache: MenuCache
    shopper_sessions: ShopperSessionStore
    checkout_service: CheckoutService
    menu_admin_service: MenuAdminService
    auth_service: AuthService
    start_resources: Callable[[], Awaitable[None]]
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    data_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    # Password sign-in rebinds a client's auth header, so sign-ins get their own.
    auth_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    menu_cache = MenuCache(
        feed=SupabaseRealtimeMenuFeed(
            supabase_url=resolved_settings.supabase_url,
            supabase_key=resolved_settings.supabase_service_key,
            table=resolved_settings.dishes_table,
        )
    )
    webhook_intake: HttpxWebhookOrderIntake | None = None
    order_intake: OrderIntake = LoggingOrderIntake()
    if resolved_settings.order_webhook_url:
        webhook_intake = HttpxWebhookOrderIntake.create(
            resolved_settings.order_webhook_url
        )
        order_intake = webhook_intake
    menu_admin_service = MenuAdminService(
        repository=SupabaseDishRepository(
            data_client, table=resolved_settings.dishes_table
        ),
        image_storage=SupabaseImageStorage(
            data_client, bucket=resolved_settings.dishes_bucket
        ),
    )
    auth_service = AuthService(
        client=SupabaseAuthClient(auth_client),
        admin_emails=parse_admin_emails(resolved_settings.admin_emails),
    )
    detach_listeners = _attach_log_listeners(menu_cache, auth_service)

    async def start_resources() -> None:
        await menu_cache.start()

    async def close_resources() -> None:
        detach_listeners()
        await menu_cache.stop()
        if webhook_intake is not None:
            await webhook_intake.close()

    return AppContainer(
        settings=resolved_settings,
        menu_cache=menu_cache,
        shopper_sessions=InMemoryShopperSessionStore(
            ttl_seconds=resolved_settings.cart_ttl_seconds
        ),
        checkout_service=CheckoutService(order_intake),
        menu_admin_service=menu_admin_service,
        auth_service=auth_service,
        start_resources=start_resources,
        close_resources=close_resources,
    )


def _attach_log_listeners(
    menu_cache: MenuCache, auth_service: AuthService
) -> Callable[[], None]:
    """Log menu snapshots and auth changes; return a detach hook."""

    def on_snapshot(dishes: list[Dish]) -> None:
        logger.info(
            "Menu snapshot applied",
            extra={"dishes": len(dishes), "version": menu_cache.version},
        )

    def on_session(session: AuthSession) -> None:
        if session.is_anonymous:
            logger.info("Admin signed out")
        else:
            logger.info("Admin signed in", extra={"email": session.email})

    remove_snapshot = menu_cache.subscribe(on_snapshot)
    remove_session = auth_service.on_change(on_session)

    def detach() -> None:
        remove_snapshot()
        remove_session()

    return detach
