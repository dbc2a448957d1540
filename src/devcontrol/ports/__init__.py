"""Port interfaces for external collaborators."""
