"""Domain modules and their public exports."""

from . import common, accounts, categories, ledger, audit, notifications, assets, borrowing, reports

__all__ = [
    "accounts",
    "assets",
    "audit",
    "borrowing",
    "categories",
    "common",
    "ledger",
    "notifications",
    "reports",
]
