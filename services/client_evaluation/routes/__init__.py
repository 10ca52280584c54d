"""
Client Evaluation Routes
========================

API route handlers for the Client Evaluation Service.
"""

from services.client_evaluation.routes import auth, clients, evaluations


__all__ = ["auth", "clients", "evaluations"]
