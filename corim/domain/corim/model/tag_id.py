from __future__ import annotations

import re
from typing import Any, ClassVar
from uuid import UUID

from corim.domain.shared.model.value import ValueObject


class TagID(ValueObject):
    """
    corim-id: either a UUID or a non-empty text string.
    TagID() with no value is the "unset" sentinel.
    """

    value: UUID | str | None = None

    _uuid_re: ClassVar[re.Pattern] = re.compile(
        r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
    )

    @classmethod
    def from_value(cls, v: Any) -> TagID:
        """Normalize a UUID, its 16-byte binary form, or a non-empty string.

        UUID-shaped strings are stored in UUID form so both wire formats agree
        on the representation. Raises ValueError for anything else.
        """
        if isinstance(v, TagID):
            if v.is_empty:
                raise ValueError("empty tag-id")
            return v
        if isinstance(v, UUID):
            return cls(value=v)
        if isinstance(v, (bytes, bytearray)):
            if len(v) != 16:
                raise ValueError(f"binary tag-id must be 16 bytes, got {len(v)}")
            return cls(value=UUID(bytes=bytes(v)))
        if isinstance(v, str):
            if v == "":
                raise ValueError("empty tag-id")
            if cls._uuid_re.match(v):
                return cls(value=UUID(v))
            return cls(value=v)
        raise ValueError(f"unsupported tag-id type {type(v).__name__}")

    @property
    def is_empty(self) -> bool:
        return self.value is None or self.value == ""

    @property
    def is_uuid(self) -> bool:
        return isinstance(self.value, UUID)

    def __str__(self) -> str:
        if self.value is None:
            return ""
        return str(self.value)
