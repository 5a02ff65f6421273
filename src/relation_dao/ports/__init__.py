"""Port interfaces (typing.Protocol)."""
