# backend/models/__init__.py

from .base import db

# Document tables
from .documents import CustomerDocument, UnitDocument, CoLocationDocument, COLLECTIONS

# Entity schemas
from .schemas import CustomerSchema, UnitSchema, CoLocationSchema, SCHEMAS, get_schema

__all__ = [
    'db',
    'CustomerDocument',
    'UnitDocument',
    'CoLocationDocument',
    'COLLECTIONS',
    'CustomerSchema',
    'UnitSchema',
    'CoLocationSchema',
    'SCHEMAS',
    'get_schema',
]
