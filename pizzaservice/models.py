"""
Domain Models

In-memory entities of the ordering workflow:
    - MenuItem: one purchasable dish (identity = item id)
    - Menu: the ordered, shared catalog of MenuItems
    - Customer: contact and delivery address
    - OrderLine: item + quantity with a derived line total
    - Order: customer, lines and request metadata with a derived grand total

All money values are ``Decimal``; binary floats are converted through their
string form and never used for arithmetic.

Version: 1.0.0
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Iterator, Optional, Union

from pizzaservice.data import SEED_CATALOG

CURRENCY_SYMBOL = "€"
CENT = Decimal("0.01")

MoneyLike = Union[Decimal, int, str, float]


# =============================================================================
# MONEY HELPERS
# =============================================================================

def to_decimal(value: MoneyLike) -> Decimal:
    """Convert a price-like value to ``Decimal`` without float drift."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Price must be a number, not a bool.")
    if isinstance(value, float):
        value = str(value)
    if not isinstance(value, (int, str)):
        raise TypeError(f"Unsupported price type: {type(value).__name__}")
    try:
        return Decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"Invalid price: {value!r}") from e


def format_money(amount: Optional[Decimal]) -> str:
    """Render an amount with exactly two fractional digits."""
    if amount is None:
        amount = Decimal("0")
    return str(amount.quantize(CENT, rounding=ROUND_HALF_UP))


def _present(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _join_present(*parts: Optional[str]) -> str:
    return " ".join(p for p in (_present(part) for part in parts) if p)


# =============================================================================
# MENU
# =============================================================================

@dataclass(frozen=True)
class MenuItem:
    """
    A purchasable dish.

    Two items are equal when their ``item_id`` matches; name, description
    and price are descriptive only. Corrections produce a new item with
    the same identity (``with_price`` and friends).
    """

    item_id: str
    name: str = field(compare=False)
    description: str = field(default="", compare=False)
    unit_price: Decimal = field(default=Decimal("0.00"), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price))

    def with_name(self, name: str) -> MenuItem:
        return replace(self, name=name)

    def with_description(self, description: str) -> MenuItem:
        return replace(self, description=description)

    def with_price(self, unit_price: MoneyLike) -> MenuItem:
        return replace(self, unit_price=unit_price)

    def display(self, currency: str = CURRENCY_SYMBOL) -> str:
        return f"{self.item_id} - {self.name} ({format_money(self.unit_price)} {currency})"

    def __str__(self) -> str:
        return self.display()


class Menu:
    """
    Ordered catalog of menu items with unique ids.

    ``items`` hands out a tuple snapshot, so callers cannot add, remove
    or reorder entries of the catalog through it. The menu does no
    locking of its own: once it is shared between requests, any ``add``
    has to be serialized by the caller.
    """

    def __init__(self, items: Iterable[MenuItem] = ()):
        self._items: list[MenuItem] = []
        for item in items:
            self.add(item)

    @classmethod
    def create(cls) -> Menu:
        """Build the menu from the built-in seed catalog."""
        return cls(
            MenuItem(item_id, name, description, Decimal(price))
            for item_id, name, description, price in SEED_CATALOG
        )

    @property
    def items(self) -> tuple[MenuItem, ...]:
        return tuple(self._items)

    def add(self, item: MenuItem) -> None:
        """
        Append an item to the end of the menu.

        Raises:
            ValueError: If item is None or its id is already on the menu
            TypeError: If item is not a MenuItem
        """
        if item is None:
            raise ValueError("Menu item must not be None.")
        if not isinstance(item, MenuItem):
            raise TypeError(f"Expected MenuItem, got {type(item).__name__}")
        if self.find_by_id(item.item_id) is not None:
            raise ValueError(f"Duplicate menu item id: {item.item_id}")
        self._items.append(item)

    def find_by_id(self, item_id: str) -> Optional[MenuItem]:
        for item in self._items:
            if item.item_id == item_id:
                return item
        return None

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, value: object) -> bool:
        if isinstance(value, MenuItem):
            return value in self._items
        if isinstance(value, str):
            return self.find_by_id(value) is not None
        return False

    def __repr__(self) -> str:
        return f"Menu(items={len(self._items)})"

    def __str__(self) -> str:
        return "Menu:\n" + "".join(f" - {item}\n" for item in self._items)


# =============================================================================
# CUSTOMER
# =============================================================================

@dataclass(frozen=True)
class Customer:
    """Contact and address details. Free text, every field optional."""

    salutation: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    street: Optional[str] = None
    house_number: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None

    def display_name(self) -> str:
        """Salutation, first and last name; missing parts are left out."""
        return _join_present(self.salutation, self.first_name, self.last_name)

    def formatted_address(self) -> str:
        """Street and house number, then postal code and city on a second line."""
        lines = (
            _join_present(self.street, self.house_number),
            _join_present(self.postal_code, self.city),
        )
        return "\n".join(line for line in lines if line)

    def __str__(self) -> str:
        address = ", ".join(self.formatted_address().splitlines())
        return f"{self.display_name()} - {address}"


# =============================================================================
# ORDER
# =============================================================================

_UNSET = object()


class OrderLine:
    """
    One ordered item with its quantity.

    ``line_total`` is computed from the current item price and quantity.
    Assigning to ``line_total`` pins an explicit value instead; the pin is
    dropped again as soon as the item or the quantity changes.
    """

    def __init__(self, item: MenuItem, quantity: int):
        self._total_override = _UNSET
        self.item = item
        self.quantity = quantity

    @property
    def item(self) -> MenuItem:
        return self._item

    @item.setter
    def item(self, item: MenuItem) -> None:
        if item is None:
            raise ValueError("Order line item must not be None.")
        self._item = item
        self._total_override = _UNSET

    @property
    def quantity(self) -> int:
        return self._quantity

    @quantity.setter
    def quantity(self, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError(f"Quantity must be an int, got {type(quantity).__name__}")
        if quantity < 1:
            raise ValueError("Quantity must be at least 1.")
        self._quantity = quantity
        self._total_override = _UNSET

    @property
    def line_total(self) -> Optional[Decimal]:
        if self._total_override is not _UNSET:
            return self._total_override
        return self._item.unit_price * self._quantity

    @line_total.setter
    def line_total(self, value: Optional[MoneyLike]) -> None:
        self._total_override = None if value is None else to_decimal(value)

    @property
    def is_total_overridden(self) -> bool:
        return self._total_override is not _UNSET

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderLine):
            return NotImplemented
        return self._item == other._item and self._quantity == other._quantity

    def __hash__(self) -> int:
        return hash((self._item, self._quantity))

    def __repr__(self) -> str:
        return f"OrderLine(item={self._item.item_id!r}, quantity={self._quantity})"

    def display(self, currency: str = CURRENCY_SYMBOL) -> str:
        return f"{self._quantity} × {self._item.name} = {format_money(self.line_total)} {currency}"

    def __str__(self) -> str:
        return self.display()


class Order:
    """
    A customer's submission: customer, ordered lines and request metadata.

    Equality only looks at ``session_token`` and ``customer``. An order
    stands for "the current order of this session", so two orders of the
    same session and customer are equal even if their lines differ.
    """

    def __init__(
        self,
        customer: Optional[Customer] = None,
        origin_address: Optional[str] = None,
        session_token: Optional[str] = None,
        lines: Iterable[OrderLine] = (),
        created_at: Optional[datetime] = None,
    ):
        self.customer = customer
        self.origin_address = origin_address
        self.session_token = session_token
        self.created_at = created_at or datetime.now(timezone.utc)
        self._lines: list[OrderLine] = []
        for line in lines:
            self.add_line(line)

    @property
    def lines(self) -> tuple[OrderLine, ...]:
        return tuple(self._lines)

    def add_line(self, line: OrderLine) -> None:
        if line is None:
            raise ValueError("Order line must not be None.")
        self._lines.append(line)

    @property
    def grand_total(self) -> Decimal:
        """Sum of all line totals; a line without a total counts as zero."""
        total = Decimal("0")
        for line in self._lines:
            line_total = line.line_total
            if line_total is not None:
                total += line_total
        return total

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return (
            self.session_token == other.session_token
            and self.customer == other.customer
        )

    def __hash__(self) -> int:
        return hash((self.session_token, self.customer))

    def __repr__(self) -> str:
        return (
            f"Order(session_token={self.session_token!r}, "
            f"lines={len(self._lines)}, grand_total={format_money(self.grand_total)})"
        )

    def display(self, currency: str = CURRENCY_SYMBOL) -> str:
        """Multi-line summary with every amount in the given currency."""
        parts = ["Order from: "]
        if self.customer is not None:
            parts.append(self.customer.display_name())
        parts.append("\n")
        for line in self._lines:
            parts.append(f"  {line.display(currency)}\n")
        parts.append(f"Total: {format_money(self.grand_total)} {currency}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.display()
