"""
Base model for all persisted document models.

DocumentModel provides from_record() / to_record() for round-tripping
between Python objects and the plain dicts a repository stores.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class DocumentModel(BaseModel):
    """
    Base for all document models.

    to_record()   — converts model → plain dict for a repository to store
    from_record() — converts a stored dict → model instance (returns None
                    gracefully when passed None)
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_record(self) -> dict:
        return self.model_dump()

    @classmethod
    def from_record(cls, data: Optional[dict]) -> Optional["DocumentModel"]:
        if data is None:
            return None
        return cls.model_validate(data)
