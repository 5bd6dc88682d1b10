"""Property-based tests and their Hypothesis strategies."""
