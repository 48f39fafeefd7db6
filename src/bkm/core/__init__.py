"""Repositories and use cases."""
