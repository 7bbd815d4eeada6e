from __future__ import annotations

import uuid


class UuidIdGenerator:
    def new_document_id(self) -> str:
        return uuid.uuid4().hex[:20]
