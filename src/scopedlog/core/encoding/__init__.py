"""Encoders for persisted data."""
