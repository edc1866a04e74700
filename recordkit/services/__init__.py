"""Batch services behind the recordkit command-line tools."""
