"""
Tierwise Services
=================

Services:
- client_evaluation: client registration, evaluation scoring and tiering
"""

__all__ = [
    "client_evaluation",
]
