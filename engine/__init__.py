"""Core rules engine package for UNO."""

__all__ = [
    "cards",
    "deck",
    "errors",
    "mechanics",
    "state",
    "effects",
    "turns",
    "game",
    "rules_schema",
    "service",
]
