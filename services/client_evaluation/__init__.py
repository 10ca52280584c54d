"""
Client Evaluation Service
=========================

Client registration and evaluation scoring service.

Features:
- Client registration
- Multi-category evaluations with aggregate scoring
- Tier assignment (Tier1..Tier4) and recommendation notes
- Staleness-based follow-up priority
- Operator registration and login

Port: 5000
"""

__version__ = "0.1.0"
