"""
Contract tests for repository interfaces.

Contract tests verify that all implementations of a repository interface
follow the same contract and behavior, including the in-memory fakes the
unit tests rely on.
"""
