"""Waypoint discovery, naming and recording."""

from .analyser import IssueInfo, IssueNumberAnalyser, IssueNumberError
from .branches import BaseBranchNotFoundError, BranchNotFoundError, BranchResolver, NotCurrentBranchError
from .history import ChangeLogReader, PatchHistoryReader, parse_waypoints
from .naming import PatchNamingEngine, interdiff_filename, patch_filename
from .recorder import WaypointRecorder

__all__ = [
    "BaseBranchNotFoundError",
    "BranchNotFoundError",
    "BranchResolver",
    "ChangeLogReader",
    "IssueInfo",
    "IssueNumberAnalyser",
    "IssueNumberError",
    "NotCurrentBranchError",
    "PatchHistoryReader",
    "PatchNamingEngine",
    "WaypointRecorder",
    "interdiff_filename",
    "parse_waypoints",
    "patch_filename",
]
