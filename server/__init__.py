"""HTTP adapters for the game engine."""
