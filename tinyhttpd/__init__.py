"""A small threaded HTTP/1.1 server with calculator and static hex-dump endpoints."""

__version__ = "0.1.0"