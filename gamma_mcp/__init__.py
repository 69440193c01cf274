"""
Gamma MCP Server

MCP server exposing the Gamma generation API as two tools: submit a
generation, then fetch or poll its status until it completes.
"""

__version__ = "1.0.0"

try:
    import importlib.metadata

    __version__ = importlib.metadata.version("gamma-mcp")
except (importlib.metadata.PackageNotFoundError, ImportError):
    # Fallback for development mode
    pass

__all__ = ["__version__"]
