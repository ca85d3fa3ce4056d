"""HTTP API for the chatlog service."""
