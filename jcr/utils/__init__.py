"""Logging and trace utilities."""
