"""
                Pizza Service

Single-restaurant ordering backend: a fixed menu, a customer form,
and a pricing engine that turns raw form input into a priced order
for the invoice and kitchen views.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
