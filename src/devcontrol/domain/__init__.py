"""Domain layer for devcontrol."""
