"""Application services for devcontrol."""
