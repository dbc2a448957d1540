"""Adapters backing the devcontrol ports."""
