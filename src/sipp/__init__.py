"""Personal snippet manager: local/remote store, terminal client and web API."""

__all__ = [
    "actions",
    "adapters",
    "backend",
    "highlight",
    "keymaps",
    "modes",
    "runtime",
    "server",
    "session",
    "store",
]

__version__ = "0.1.0"
