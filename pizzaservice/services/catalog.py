"""
Catalog Provisioning

One Menu is created at application startup and kept on the application
state for the lifetime of the process. Request handlers receive it through
the ``get_menu`` dependency instead of looking up a module global.

Usage:
    @app.get("/api/menu")
    def list_menu(menu: Menu = Depends(get_menu)):
        ...
"""

import logging
from typing import Any

from fastapi import Request

from pizzaservice.models import Menu

logger = logging.getLogger(__name__)


def provision_menu(state: Any) -> Menu:
    """
    Create the shared menu and publish it on ``state``.

    Called once from the application lifespan.
    """
    menu = Menu.create()
    state.menu = menu
    logger.info(f"Menu provisioned with {len(menu)} items")
    return menu


def get_menu(request: Request) -> Menu:
    """
    FastAPI dependency returning the shared menu.

    Falls back to provisioning a menu on first use if startup did not run.
    """
    state = request.app.state
    menu = getattr(state, "menu", None)
    if menu is None:
        logger.warning("Menu was not provisioned at startup, creating it now")
        menu = provision_menu(state)
    return menu
