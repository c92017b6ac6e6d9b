"""Listing models, validation, batch import, filtering, and CSV helpers."""
