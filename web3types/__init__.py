"""Typed models for Ethereum JSON-RPC data, with JSON encoding and decoding."""

__version__ = "0.1.0"