"""Data-access layer for the cookbook recipe manager."""
