"""Chat message log backend with paging, catch-up fetches and usage ranges."""

__version__ = "0.1.0"
