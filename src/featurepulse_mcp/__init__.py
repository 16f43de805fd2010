"""FeaturePulse MCP Server - Model Context Protocol integration.

This package exposes the FeaturePulse feedback API as MCP tools so AI
assistants can review, prioritize and update feature requests.

Modules:
- server: stdio MCP server implementation
- client: authenticated HTTP client with project auto-detection
- resolver: project inference from multi-project API errors
- tools: MCP tool definitions
- handlers: Tool implementation handlers and dispatch
- formatters: Response formatting utilities
"""

__version__ = "1.0.0"

from . import formatters
from . import tools
from . import handlers

__all__ = ["formatters", "tools", "handlers", "__version__"]
