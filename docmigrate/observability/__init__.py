"""Logging and metrics for docmigrate."""
