"""
                        Services Module

Request-independent logic used by the HTTP layer.

Services:
    - ordering: builds priced orders from raw form input
    - catalog: provisions the shared menu at startup
    - order_store: keeps the current order of each session
"""

from pizzaservice.services.catalog import get_menu, provision_menu
from pizzaservice.services.order_store import SessionOrderStore, get_order_store
from pizzaservice.services.ordering import (
    FormSubmission,
    OrderBuilder,
    SubmissionContext,
    build_order,
    parse_quantity,
    quantity_key,
)

__all__ = [
    "get_menu",
    "provision_menu",
    "SessionOrderStore",
    "get_order_store",
    "FormSubmission",
    "OrderBuilder",
    "SubmissionContext",
    "build_order",
    "parse_quantity",
    "quantity_key",
]
