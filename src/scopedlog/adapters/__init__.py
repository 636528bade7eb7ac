"""Adapters for configuration stores, log sinks and settings surfaces."""
