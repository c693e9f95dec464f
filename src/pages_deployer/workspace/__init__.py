"""Staging workspace helpers."""

from .manager import StagingWorkspace, SyncResult, matches_any, parse_clean_exclude

__all__ = ["StagingWorkspace", "SyncResult", "matches_any", "parse_clean_exclude"]
