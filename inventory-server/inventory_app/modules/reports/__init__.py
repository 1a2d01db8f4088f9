"""Read-only inventory reports."""

from .models import AssetSummary, Dashboard
from .service import ReportService

__all__ = ["AssetSummary", "Dashboard", "ReportService"]
