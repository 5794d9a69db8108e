"""Admin API endpoints guarded by the remote auth session.

Handlers that call Supabase are plain functions so FastAPI runs them in its
threadpool; the Supabase client is blocking.
"""

from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import HTMLResponse

from home_kitchen.api.schemas import (  # noqa: TC001
    AvailabilityIn,
    DishCreateIn,
    DishOut,
    LoginIn,
)
from home_kitchen.api.views import ADMIN_HTML, render_admin_dishes
from home_kitchen.domain.auth import AuthSession
from home_kitchen.domain.menu import DishDraft, ImageUpload

if TYPE_CHECKING:
    from home_kitchen.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def require_admin(
    request: Request, authorization: str | None = Header(default=None)
) -> AuthSession:
    """Resolve the caller's session and ensure it belongs to an admin."""
    container: AppContainer = request.app.state.container
    session = container.auth_service.resolve(_bearer_token(authorization))
    if not session.is_admin:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return session


@router.get("/ui", response_class=HTMLResponse)
async def admin_ui() -> HTMLResponse:
    """Admin panel that consumes the admin API."""
    return HTMLResponse(ADMIN_HTML)


@router.post("/login")
def login(body: LoginIn, request: Request) -> dict[str, object]:
    """Sign in with e-mail and password."""
    container: AppContainer = request.app.state.container
    session = container.auth_service.sign_in(body.email, body.password)
    return {"access_token": session.access_token, "email": session.email}


@router.post("/logout")
def logout(
    request: Request, session: AuthSession = Depends(require_admin)
) -> dict[str, str]:
    """Sign the current admin out."""
    container: AppContainer = request.app.state.container
    container.auth_service.sign_out(session)
    return {"status": "ok"}


@router.get("/session")
async def current_session(
    session: AuthSession = Depends(require_admin),
) -> dict[str, object]:
    """Return who is signed in."""
    return {"email": session.email, "is_admin": session.is_admin}


@router.get("/dishes", dependencies=[Depends(require_admin)])
async def list_dishes(request: Request) -> dict[str, object]:
    """Return every dish in the live cache, available or not."""
    container: AppContainer = request.app.state.container
    return {
        "version": container.menu_cache.version,
        "dishes": [
            DishOut.from_dish(dish).model_dump()
            for dish in container.menu_cache.current()
        ],
    }


@router.get(
    "/fragments/dishes",
    response_class=HTMLResponse,
    dependencies=[Depends(require_admin)],
)
async def dishes_fragment(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return render_admin_dishes(container.menu_cache.current())


@router.post(
    "/dishes",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_dish(body: DishCreateIn, request: Request) -> dict[str, object]:
    """Upload the photo and create a dish record."""
    container: AppContainer = request.app.state.container
    draft = DishDraft(
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
    )
    image = None
    if body.image is not None:
        try:
            data = base64.b64decode(body.image.data_base64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Invalid image encoding",
            ) from exc
        image = ImageUpload(
            filename=body.image.filename,
            content_type=body.image.content_type,
            data=data,
        )
    dish = container.menu_admin_service.create_dish(draft, image)
    return {"dish": DishOut.from_dish(dish).model_dump()}


@router.delete("/dishes/{dish_id}", dependencies=[Depends(require_admin)])
def delete_dish(
    dish_id: str, request: Request, confirmed: bool = False
) -> dict[str, object]:
    """Delete a dish once the admin has confirmed."""
    container: AppContainer = request.app.state.container
    deleted = container.menu_admin_service.delete_dish(dish_id, lambda: confirmed)
    return {"deleted": deleted}


@router.post("/dishes/{dish_id}/availability", dependencies=[Depends(require_admin)])
def toggle_availability(
    dish_id: str, body: AvailabilityIn, request: Request
) -> dict[str, object]:
    """Flip availability based on the value the admin last saw."""
    container: AppContainer = request.app.state.container
    is_available = container.menu_admin_service.toggle_availability(
        dish_id, body.current
    )
    return {"id": dish_id, "is_available": is_available}
