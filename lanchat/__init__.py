"""A TCP chat server and a client with a terminal mode and a pygame window."""

__version__ = "0.1.0"