"""Business logic; no HTTP types below this package."""
