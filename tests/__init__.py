"""
Tierwise Test Suite
===================

Test organization:
- tests/unit/                        - Shared library tests (auth)
- tests/services/client_evaluation/  - Calculator, priority, lifecycle, storage and routes

All tests run against the in-memory document store; no database is needed.

Run tests:
    pytest                                      # All tests
    pytest tests/unit                           # Shared library tests only
    pytest tests/services/client_evaluation -k lifecycle
"""
