"""
Order Builder

Turns a raw form submission into a priced Order.

For every item on the menu (in menu order) the submission is asked for the
raw value stored under ``quantity_<item_id>``. Missing, blank, non-numeric
and non-positive values all mean "not ordered" and the item is skipped;
this is the intended behavior for a form where most fields stay empty,
so building an order never fails because of submitted data.

Usage:
    from pizzaservice.services.ordering import FormSubmission, build_order

    submission = FormSubmission(
        values={"quantity_Pi02": "2"},
        origin_address="127.0.0.1",
        session_token="abc123",
    )
    order = build_order(menu, customer, submission)

Version: 1.0.0
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol

from pizzaservice.models import Customer, Menu, Order, OrderLine, format_money

logger = logging.getLogger(__name__)

QUANTITY_FIELD_PREFIX = "quantity_"

# Quantities are 32-bit ints; anything outside that range counts as not ordered.
MAX_QUANTITY = 2**31 - 1
MIN_QUANTITY = -(2**31)

_INTEGER_PATTERN = re.compile(r"[+-]?\d{1,10}")


class SubmissionContext(Protocol):
    """What the builder needs to know about the incoming request."""

    origin_address: Optional[str]
    session_token: Optional[str]

    def get_value(self, key: str) -> Optional[str]:
        ...


@dataclass
class FormSubmission:
    """Submission backed by an already extracted key/value mapping."""

    values: Mapping[str, Optional[str]] = field(default_factory=dict)
    origin_address: Optional[str] = None
    session_token: Optional[str] = None

    def get_value(self, key: str) -> Optional[str]:
        return self.values.get(key)


def quantity_key(item_id: str) -> str:
    """Form field name holding the quantity for a menu item."""
    return f"{QUANTITY_FIELD_PREFIX}{item_id}"


def parse_quantity(raw: Optional[str]) -> Optional[int]:
    """
    Read a submitted quantity.

    Returns:
        The integer value, or None when the field is absent, blank or
        not an (optionally signed) whole number within the 32-bit int range.
    """
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    if not _INTEGER_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if not MIN_QUANTITY <= value <= MAX_QUANTITY:
        return None
    return value


class OrderBuilder:
    """
    Builds orders against one menu.

    The menu is passed in explicitly and only read, so one builder can
    serve any number of requests.
    """

    def __init__(self, menu: Menu):
        if menu is None:
            raise ValueError("Menu must not be None.")
        self.menu = menu

    def build(self, customer: Optional[Customer], submission: SubmissionContext) -> Order:
        """
        Create an order for the submitted quantities.

        Args:
            customer: Customer parsed from the form (may be None)
            submission: Access to raw field values, origin and session

        Returns:
            Order: Possibly empty, lines in menu order
        """
        order = Order(
            customer=customer,
            origin_address=submission.origin_address,
            session_token=submission.session_token,
        )

        for item in self.menu.items:
            raw = submission.get_value(quantity_key(item.item_id))
            quantity = parse_quantity(raw)

            if quantity is None:
                if raw is not None and raw.strip():
                    logger.debug(f"Ignoring malformed quantity {raw!r} for {item.item_id}")
                continue

            if quantity <= 0:
                logger.debug(f"Ignoring non-positive quantity {quantity} for {item.item_id}")
                continue

            order.add_line(OrderLine(item, quantity))

        logger.info(
            f"Order built for session {submission.session_token}: "
            f"{len(order.lines)} line(s), total {format_money(order.grand_total)}"
        )
        return order


def build_order(
    menu: Menu,
    customer: Optional[Customer],
    submission: SubmissionContext,
) -> Order:
    """Shortcut for ``OrderBuilder(menu).build(customer, submission)``."""
    return OrderBuilder(menu).build(customer, submission)
