"""
MCP tools for the Library Catalog.

Tools are the actions a client can take on the catalog: adding records,
borrowing and returning books, listing and saving. They are built around
a Catalog instance rather than reaching for global state.
"""

from .catalog_tools import build_catalog_tools

__all__ = [
    "build_catalog_tools",
]
