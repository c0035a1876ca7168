"""
Pydantic Schemas for Request/Response Validation

Request schemas carry raw form values into the domain model; response
schemas render domain objects as JSON. Money is serialized as Decimal
strings so no precision is lost on the wire.

Version: 1.0.0
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from pizzaservice.models import CURRENCY_SYMBOL, Customer, MenuItem, Order, OrderLine
from pizzaservice.services.ordering import FormSubmission, quantity_key


CUSTOMER_FIELDS = (
    "salutation",
    "first_name",
    "last_name",
    "street",
    "house_number",
    "postal_code",
    "city",
)


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class CustomerForm(BaseModel):
    """Customer fields as typed into the order form. All optional, free text."""
    salutation: Optional[str] = Field(None, examples=["Frau"])
    first_name: Optional[str] = Field(None, examples=["Anna"])
    last_name: Optional[str] = Field(None, examples=["Schmidt"])
    street: Optional[str] = Field(None, examples=["Bahnhofstraße"])
    house_number: Optional[str] = Field(None, examples=["12a"])
    postal_code: Optional[str] = Field(None, examples=["12345"])
    city: Optional[str] = Field(None, examples=["Berlin"])

    @field_validator(*CUSTOMER_FIELDS, mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    def to_customer(self) -> Customer:
        return Customer(**self.model_dump())


class OrderSubmission(BaseModel):
    """
    JSON order submission.

    ``quantities`` maps menu item ids to the raw quantity text, exactly
    like the ``quantity_<id>`` fields of the HTML form.
    """
    customer: CustomerForm = Field(default_factory=CustomerForm)
    quantities: dict[str, Optional[str]] = Field(
        default_factory=dict,
        examples=[{"Pi02": "2", "Pi03": "1"}],
    )

    @field_validator("quantities", mode="before")
    @classmethod
    def stringify_quantities(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {
                key: None if value is None else str(value)
                for key, value in v.items()
            }
        return v

    def to_submission(
        self,
        origin_address: Optional[str],
        session_token: Optional[str],
    ) -> FormSubmission:
        return FormSubmission(
            values={quantity_key(item_id): raw for item_id, raw in self.quantities.items()},
            origin_address=origin_address,
            session_token=session_token,
        )


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class MenuItemResponse(BaseModel):
    """A single menu entry."""
    item_id: str
    name: str
    description: str
    unit_price: Decimal

    @classmethod
    def from_item(cls, item: MenuItem) -> "MenuItemResponse":
        return cls(
            item_id=item.item_id,
            name=item.name,
            description=item.description,
            unit_price=item.unit_price,
        )


class OrderLineResponse(BaseModel):
    """One priced order line."""
    item_id: str
    name: str
    unit_price: Decimal
    quantity: int
    line_total: Optional[Decimal]
    display: str

    @classmethod
    def from_line(cls, line: OrderLine, currency: str = CURRENCY_SYMBOL) -> "OrderLineResponse":
        return cls(
            item_id=line.item.item_id,
            name=line.item.name,
            unit_price=line.item.unit_price,
            quantity=line.quantity,
            line_total=line.line_total,
            display=line.display(currency),
        )


class CustomerResponse(BaseModel):
    """Customer details plus the derived display strings."""
    salutation: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    street: Optional[str]
    house_number: Optional[str]
    postal_code: Optional[str]
    city: Optional[str]
    display_name: str
    formatted_address: str

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerResponse":
        return cls(
            **{name: getattr(customer, name) for name in CUSTOMER_FIELDS},
            display_name=customer.display_name(),
            formatted_address=customer.formatted_address(),
        )


class OrderResponse(BaseModel):
    """A built order as returned to the client."""
    customer: Optional[CustomerResponse]
    lines: List[OrderLineResponse]
    grand_total: Decimal
    item_count: int
    origin_address: Optional[str]
    created_at: datetime

    @classmethod
    def from_order(cls, order: Order, currency: str = CURRENCY_SYMBOL) -> "OrderResponse":
        return cls(
            customer=(
                CustomerResponse.from_customer(order.customer)
                if order.customer is not None else None
            ),
            lines=[OrderLineResponse.from_line(line, currency) for line in order.lines],
            grand_total=order.grand_total,
            item_count=order.item_count,
            origin_address=order.origin_address,
            created_at=order.created_at,
        )


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    environment: str
    menu_items: int
    stored_orders: int
    timestamp: datetime
