"""Service layer exports."""

from .errors import ResolutionError
from .name_resolver import NameResolver, ResolvedReference
from .report_builder import ReportBuilder, TierReportView, drop_percentages
from .tier_aggregator import TierAggregator

__all__ = [
    "ResolutionError",
    "NameResolver",
    "ResolvedReference",
    "ReportBuilder",
    "TierReportView",
    "drop_percentages",
    "TierAggregator",
]
