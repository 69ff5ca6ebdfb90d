"""A local TCP chat: one server relays each client's lines to all the others."""

__version__ = "0.1.0"