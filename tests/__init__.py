"""Test suite for scopepack.

Test organization:
- fixtures/: Build helpers (fake artifact writer, file builders)
- unit/: Unit tests for individual modules

Run tests with:
    pytest tests/
    pytest tests/unit/
    pytest tests/ -v --tb=short
"""
