"""
Pydantic schemas for database backup documents.
"""
from pydantic import BaseModel
from typing import Any, Dict, List
from datetime import datetime


class BackupDocument(BaseModel):
    """Full dump: table name -> list of rows."""
    timestamp: datetime
    data: Dict[str, List[Dict[str, Any]]]


class RestoreResult(BaseModel):
    restored: Dict[str, int]
