"""Endpoint modules for the iCloud web services."""
