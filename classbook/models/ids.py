import uuid


def generate_id(prefix: str) -> str:
    """Prefixed string id, e.g. seq_3f2a..."""
    return f"{prefix}_{uuid.uuid4().hex}"
