"""MCP server exposing the SUBJCT content and SEO analytics API."""

__version__ = "1.0.0"
