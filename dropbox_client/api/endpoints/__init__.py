"""Typed wrappers for individual Dropbox API endpoints."""
