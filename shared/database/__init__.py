"""
Database Module
===============

Async MongoDB access for Tierwise services.

Usage:
    from shared.database import MongoDBClient

    db = MongoDBClient.get_database()
    count = await db.clients.count_documents({})
"""

from shared.database.mongodb import MongoDBClient


__all__ = [
    "MongoDBClient",
]
