"""Storefront - e-commerce backend.

Accounts with revocable session tokens, a searchable product catalog,
shopping carts and orders, served over a JSON HTTP API.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
