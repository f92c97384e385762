"""
MCP tool groups for Taskflow.
"""
