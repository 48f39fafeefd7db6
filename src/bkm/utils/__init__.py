"""Serialization, mapping and parsing helpers."""
