"""Conversational front-end over the commercial-real-estate warehouse."""

__version__ = "0.1.0"
