"""Output generation: read-only reports and text rendering.

Re-exports key public functions for convenience.
"""

from riskbook.output.report import (
    AssetRow,
    PortfolioReport,
    build_report,
    fmt_percent,
    format_matrix,
    format_report,
)

__all__ = [
    "AssetRow",
    "PortfolioReport",
    "build_report",
    "fmt_percent",
    "format_matrix",
    "format_report",
]
