"""Command-line utilities for academic record-keeping with CSV and PDF forms."""

__version__ = "0.1.0"
