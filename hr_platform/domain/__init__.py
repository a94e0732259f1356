"""
Domain Layer
============

Core business models and persistence contracts.
This layer has no dependencies on infrastructure implementations.

Contains:
- Models: Dataclasses representing business concepts
- Repository Interfaces: Generic entity store contract and its query filters
- Constants: Field and collection names
"""
