"""
Route assembly and segmentation.

Usage:
    from fieldroute.features.routes import PathBuilder, PathConflict
    from fieldroute.features.routes import ReportAggregator

Components:
- Waypoint / Path / Project: in-memory route aggregate
- PathBuilder: per-submission start/mid/end state machine
- SegmentExtractor: re-derives segments from the flat waypoint stream
- ReportAggregator: date/project grouped history for reports
"""

from .aggregate import EmployeeRef, Path, Project, Waypoint
from .builder import PathBuilder, PathConflict
from .segments import Segment, SegmentExtractor, extract_all, utc_date
from .report import CreatorView, ReportAggregator, ReportEntry, WaypointView

__all__ = [
    # Aggregate
    "EmployeeRef",
    "Path",
    "Project",
    "Waypoint",
    # Builder
    "PathBuilder",
    "PathConflict",
    # Segments
    "Segment",
    "SegmentExtractor",
    "extract_all",
    "utc_date",
    # Report
    "CreatorView",
    "ReportAggregator",
    "ReportEntry",
    "WaypointView",
]
