"""Reporters — text, JSON, CSV and rich table output."""
