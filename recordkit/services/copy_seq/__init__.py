"""Sequence-numbered file replication service package."""

from .replicator import CopyPlan, plan_copies, replicate, sequence_name

__all__ = [
    "CopyPlan",
    "plan_copies",
    "replicate",
    "sequence_name",
]
