"""Aegis Config - resilient configuration lifecycle for the chat client.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
