"""Framework adapters exposing registry settings over HTTP."""
