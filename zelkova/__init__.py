"""Markdown notes: parsing, vault storage, folders, text editing and JSON-RPC."""

__version__ = "0.2.0"