"""A terminal chat client that exchanges JSON frames with a server over a WebSocket."""

__version__ = "0.1.0"