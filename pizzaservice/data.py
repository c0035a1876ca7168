"""Static seed data for the menu."""

from __future__ import annotations

# (item_id, name, description, unit_price) in menu display order.
SEED_CATALOG: tuple[tuple[str, str, str, str], ...] = (
    ("Pi01", "Pizzabrot", "mit Tomatensauce", "3.50"),
    ("Pi02", "Pizza Margherita", "mit Tomatensauce und frisch geriebenem Edamer-Käse", "6.70"),
    ("Pi03", "Pizza Salami", "mit Rindersalami", "7.95"),
    ("Pi04", "Pizza Spinaci", "mit Champignons, Spinat und Spiegelei", "8.50"),
    ("Pi05", "Pizza Bolognese", "mit Hackfleischsauce, Rindersalami und Jalapenos", "9.50"),
    ("Pi06", "Pizza Texas", "mit Zwiebeln, Jalapenos (scharf), Rindersalami und Barbecuesauce", "9.80"),
    ("Pi07", "Pizza Quattro Formaggi", "mit vier verschiedenen Käsesorten", "10.90"),
    ("Pi08", "Pizza Parma", "mit Schwarzwälder Schinken, frischem Rucola und geraspeltem Parmesan", "10.95"),
)
