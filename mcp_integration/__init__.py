from .client import MCPClient
