"""Infrastructure Layer - filesystem access and cross-cutting concerns.

Invariants:
    - Every OSError is mapped to ConfigIOError before leaving this layer
"""
