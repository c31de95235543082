"""
Remote data store access.

    - DataStore: abstract row-level CRUD interface
    - RestDataStore: Supabase REST (PostgREST) implementation over httpx
"""

from taskboard_mcp.api.base import DataStore, Row
from taskboard_mcp.api.rest import RestDataStore

__all__ = ["DataStore", "Row", "RestDataStore"]
