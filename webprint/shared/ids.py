"""
Identifier generation.
"""

import uuid


def generate_id(prefix: str) -> str:
    """Generate a short prefixed identifier."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def generate_request_id() -> str:
    return generate_id("req")


def generate_render_id() -> str:
    return generate_id("rnd")
