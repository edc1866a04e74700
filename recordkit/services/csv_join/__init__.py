"""CSV outer-join service package."""

from .merge import JoinResult, KeySpec, join_files, outer_join

__all__ = [
    "JoinResult",
    "KeySpec",
    "join_files",
    "outer_join",
]
