"""Hypermedia root discovery for the Data Flow management server."""

__version__ = "0.1.0"
