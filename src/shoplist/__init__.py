"""
Shoplist household shopping-list manager.

The package exposes weekly shopping lists, their items, a usage-ranked catalog of
frequently purchased items, and the summary statistics derived from a list.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
