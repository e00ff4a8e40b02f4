"""Core engine package for the four-seat trick game."""

__all__ = [
    "cards",
    "deck",
    "rules",
    "players",
    "trick",
    "state",
    "opponent",
    "scoring",
    "clock",
    "events",
    "config",
    "game",
    "service",
]
