"""
Domain Layer

Pure domain model for ephemeral file storage: entities, value objects,
repository interfaces and the storage engine.
"""
