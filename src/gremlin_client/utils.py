"""Small shared helpers."""

import uuid


def get_uuid() -> str:
    """Generate a random identifier for sessions and requests."""
    return str(uuid.uuid4())
