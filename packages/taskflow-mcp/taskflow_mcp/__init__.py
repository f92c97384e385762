"""
Taskflow MCP server.
"""
