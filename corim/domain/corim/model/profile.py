from __future__ import annotations

import re
from typing import ClassVar
from urllib.parse import urlsplit

from corim.domain.shared.model.value import ValueObject


class Profile(ValueObject):
    """
    Profile identifier: an absolute URI or a dotted-decimal OID.
    Exactly one of `uri` / `oid` is populated on a valid profile.
    """

    uri: str | None = None
    oid: str | None = None

    _oid_re: ClassVar[re.Pattern] = re.compile(r"^[0-2](\.(0|[1-9][0-9]*))+$")
    _scheme_re: ClassVar[re.Pattern] = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*$")

    @classmethod
    def is_oid_text(cls, s: str) -> bool:
        if not cls._oid_re.match(s):
            return False
        arcs = [int(a) for a in s.split(".")]
        # second arc is limited under the 0 and 1 roots
        return arcs[0] == 2 or arcs[1] < 40

    @classmethod
    def is_uri_text(cls, s: str) -> bool:
        if not s or any(c.isspace() for c in s):
            return False
        parts = urlsplit(s)
        if not cls._scheme_re.match(parts.scheme):
            return False
        if s[len(parts.scheme) + 1 :].startswith("//"):
            return bool(parts.netloc)
        return bool(parts.path)

    @classmethod
    def parse(cls, url_or_oid: str) -> Profile:
        """Parse a profile string. OIDs are tried first; raises ValueError if neither form matches."""
        if not isinstance(url_or_oid, str):
            raise ValueError(f"profile must be a string, got {type(url_or_oid).__name__}")
        s = url_or_oid.strip()
        if cls.is_oid_text(s):
            return cls(oid=s)
        if cls.is_uri_text(s):
            return cls(uri=s)
        raise ValueError(f"{url_or_oid!r} is neither a valid URI nor a valid OID")

    @property
    def is_uri(self) -> bool:
        return self.uri is not None

    @property
    def is_oid(self) -> bool:
        return self.oid is not None

    def validate(self) -> None:
        if not self.is_oid and not self.is_uri:
            raise ValueError("profile should be OID or URI")
        if self.is_oid and self.is_uri:
            raise ValueError("profile should be OID or URI, not both")
        if self.is_oid and not self.is_oid_text(self.oid):
            raise ValueError(f"invalid profile OID: {self.oid!r}")
        if self.is_uri and not self.is_uri_text(self.uri):
            raise ValueError(f"invalid profile URI: {self.uri!r}")

    def __str__(self) -> str:
        return self.uri or self.oid or ""
