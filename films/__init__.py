"""Film catalog service: CRUD over films with optimistic concurrency control."""

__version__ = "1.0.0"
