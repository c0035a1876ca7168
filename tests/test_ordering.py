"""Tests for the order builder."""

import logging
from decimal import Decimal

import pytest

from pizzaservice.models import Customer, Menu, MenuItem
from pizzaservice.services.ordering import (
    FormSubmission,
    OrderBuilder,
    build_order,
    parse_quantity,
    quantity_key,
)


def submit(values, token="session-1", origin="10.0.0.7"):
    return FormSubmission(values=values, origin_address=origin, session_token=token)


def test_quantity_key():
    assert quantity_key("Pi02") == "quantity_Pi02"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2", 2),
        ("  3 ", 3),
        ("+4", 4),
        ("0", 0),
        ("-3", -3),
        ("007", 7),
        (None, None),
        ("", None),
        ("   ", None),
        ("abc", None),
        ("1.5", None),
        ("2 pizzas", None),
        ("1e3", None),
        ("--1", None),
        ("2147483647", 2147483647),
        ("-2147483648", -2147483648),
        ("2147483648", None),
        ("9" * 40, None),
        ("9" * 5000, None),
    ],
)
def test_parse_quantity(raw, expected):
    assert parse_quantity(raw) == expected


def test_blank_and_malformed_entries_are_skipped(abc_menu):
    order = build_order(
        abc_menu,
        Customer(),
        submit({"quantity_A": "2", "quantity_B": "", "quantity_C": "abc"}),
    )

    assert [(line.item.item_id, line.quantity) for line in order.lines] == [("A", 2)]


def test_zero_and_negative_quantities_are_skipped(abc_menu):
    order = build_order(abc_menu, Customer(), submit({"quantity_A": "0", "quantity_B": "-3"}))

    assert order.lines == ()
    assert order.grand_total == Decimal("0")


def test_lines_follow_menu_order_not_input_order(abc_menu):
    order = build_order(abc_menu, Customer(), submit({"quantity_C": "1", "quantity_A": "1"}))

    assert [line.item.item_id for line in order.lines] == ["A", "C"]


def test_lines_reference_menu_items(abc_menu):
    order = build_order(abc_menu, None, submit({"quantity_B": "2"}))

    assert order.lines[0].item is abc_menu.find_by_id("B")


def test_unknown_keys_are_ignored(abc_menu):
    order = build_order(abc_menu, None, submit({"quantity_Z": "5", "first_name": "Anna"}))

    assert order.is_empty


def test_order_metadata_is_attached(abc_menu, anna):
    order = build_order(abc_menu, anna, submit({}, token="tok", origin="192.168.1.5"))

    assert order.customer is anna
    assert order.session_token == "tok"
    assert order.origin_address == "192.168.1.5"
    assert order.is_empty


def test_builder_never_fails_on_submitted_data(abc_menu):
    junk = ["", " ", "x", "-0", "9" * 40, "9" * 5000, "1,5", "½", "\n", "+", "-"]
    for value in junk:
        values = {quantity_key(item.item_id): value for item in abc_menu}
        order = build_order(abc_menu, None, submit(values))
        assert all(line.quantity >= 1 for line in order.lines)


def test_huge_quantity_is_priced_exactly(abc_menu):
    order = build_order(abc_menu, None, submit({"quantity_A": "1000000"}))

    assert order.grand_total == Decimal("1100000.00")


def test_seeded_menu_end_to_end(menu, anna):
    order = OrderBuilder(menu).build(
        anna, submit({"quantity_Pi02": "2", "quantity_Pi03": "1"})
    )

    assert [str(line) for line in order.lines] == [
        "2 × Pizza Margherita = 13.40 €",
        "1 × Pizza Salami = 7.95 €",
    ]
    assert order.grand_total == Decimal("21.35")
    assert order.customer.display_name() == "Frau Anna Schmidt"


def test_resubmission_builds_a_new_equal_order(menu, anna):
    builder = OrderBuilder(menu)
    first = builder.build(anna, submit({"quantity_Pi01": "1"}))
    second = builder.build(anna, submit({"quantity_Pi08": "3"}))

    assert first is not second
    assert first == second
    assert first.grand_total == Decimal("3.50")
    assert second.grand_total == Decimal("32.85")


def test_any_object_with_the_submission_interface_works(abc_menu):
    class QueryString:
        origin_address = "::1"
        session_token = "qs"

        def __init__(self, pairs):
            self.pairs = dict(pairs)

        def get_value(self, key):
            return self.pairs.get(key)

    order = build_order(abc_menu, None, QueryString([("quantity_C", "4")]))

    assert order.grand_total == Decimal("13.20")
    assert order.session_token == "qs"


def test_builder_requires_menu():
    with pytest.raises(ValueError):
        OrderBuilder(None)


def test_skipped_entries_are_logged(abc_menu, caplog):
    caplog.set_level(logging.DEBUG, logger="pizzaservice.services.ordering")

    build_order(abc_menu, None, submit({"quantity_A": "abc", "quantity_B": "0"}))

    assert "Ignoring malformed quantity 'abc' for A" in caplog.text
    assert "Ignoring non-positive quantity 0 for B" in caplog.text


def test_builder_reads_menu_at_build_time():
    menu = Menu()
    builder = OrderBuilder(menu)
    assert builder.build(None, submit({"quantity_N": "1"})).is_empty

    menu.add(MenuItem("N", "New", unit_price="4.00"))
    assert builder.build(None, submit({"quantity_N": "1"})).grand_total == Decimal("4.00")


def test_out_of_range_quantity_counts_as_not_ordered(abc_menu):
    order = build_order(
        abc_menu,
        None,
        submit({"quantity_A": "9" * 5000, "quantity_B": "2147483648", "quantity_C": "1"}),
    )

    assert [(line.item.item_id, line.quantity) for line in order.lines] == [("C", 1)]
    assert order.grand_total == Decimal("3.30")
