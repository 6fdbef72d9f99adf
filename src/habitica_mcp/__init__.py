"""
Habitica MCP Server - Habitica task management for MCP hosts.

Architecture:
    MCP Tools Layer (FastMCP, pydantic inputs)
         │
         ▼
    HabiticaClient (httpx, envelope handling, field translation)
         │
         ▼
    Habitica REST API v3
"""

__version__ = "0.1.0"
__author__ = "Habitica MCP Contributors"

from habitica_mcp.exceptions import (
    HabiticaError,
    HabiticaConfigurationError,
    HabiticaAPIError,
    HabiticaAuthenticationError,
    HabiticaNotFoundError,
)

__all__ = [
    "__version__",
    "HabiticaError",
    "HabiticaConfigurationError",
    "HabiticaAPIError",
    "HabiticaAuthenticationError",
    "HabiticaNotFoundError",
]
