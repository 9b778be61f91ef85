from __future__ import annotations

import uuid


class IdGenerator:
    """Collision-resistant identifiers for extra classes and exams."""

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex}"
