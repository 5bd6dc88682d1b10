"""Ephemera - ephemeral file hosting backend."""
