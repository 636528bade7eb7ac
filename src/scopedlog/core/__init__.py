"""Core domain: severity, configuration, loggers and the registry."""
