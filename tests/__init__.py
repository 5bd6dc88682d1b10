"""
Tests package for the Ephemera backend.

This package contains test suites organized by type:
- unit/: Fast tests against in-memory fakes and mocks
- integration/: Tests with the real filesystem, SQLite and Flask app
- contracts/: Contract tests for repository interfaces
- property/: Property-based tests using Hypothesis
"""
