"""Inventory tracker service: asset registry and borrow-request workflow."""

__version__ = "0.1.0"
