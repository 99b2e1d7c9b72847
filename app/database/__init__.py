"""
Database module for LaneList.

This module provides engine initialization, connection pooling and session
management for the PostgreSQL carrier store.
"""

from .sqlmodel_engine import SQLModelDatabaseManager

__all__ = ["SQLModelDatabaseManager"]
