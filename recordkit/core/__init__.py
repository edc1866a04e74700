"""Core infrastructure shared by the recordkit tools."""
