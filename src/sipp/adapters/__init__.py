"""Front-end adapters for the session engine."""
