"""TaskBoard client package."""

from taskboard_mcp.client.client import TaskBoardClient

__all__ = ["TaskBoardClient"]
