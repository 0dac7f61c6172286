from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from corim.domain.shared.error import BuildError

if TYPE_CHECKING:
    from corim.domain.corim.model.aggregate import UnsignedCorim
    from corim.domain.corim.model.hash_entry import HashEntry
    from corim.domain.corim.model.value import TagKind
    from corim.domain.corim.port.sub_manifest import SubManifest


@dataclass(frozen=True)
class BuildResult:
    """Outcome of a builder operation on an UnsignedCorim.

    Holds either the (mutated) container or the error that stopped the
    operation. The builder operations are mirrored here so calls can be
    chained; once a step fails, every later step returns the same failed
    result without touching the container.

    Attributes:
        corim: The container, when the operation succeeded.
        error: Why the operation failed, otherwise None.
    """

    corim: UnsignedCorim | None = None
    error: BuildError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        """Return True if the operation succeeded."""
        return self.ok

    def unwrap(self) -> UnsignedCorim:
        """Return the container or raise the stored BuildError."""
        if self.error is not None:
            raise self.error
        if self.corim is None:
            raise BuildError("no container to unwrap", operation="unwrap")
        return self.corim

    # --- chaining ---

    def set_id(self, value: Any) -> BuildResult:
        return self._chain("set_id", value)

    def add_sub_manifest(self, doc: SubManifest, kind: TagKind) -> BuildResult:
        return self._chain("add_sub_manifest", doc, kind)

    def add_comid(self, doc: SubManifest) -> BuildResult:
        return self._chain("add_comid", doc)

    def add_coswid(self, doc: SubManifest) -> BuildResult:
        return self._chain("add_coswid", doc)

    def add_dependent_rim(self, href: str, thumbprint: HashEntry | None = None) -> BuildResult:
        return self._chain("add_dependent_rim", href, thumbprint)

    def add_profile(self, url_or_oid: str) -> BuildResult:
        return self._chain("add_profile", url_or_oid)

    def _chain(self, operation: str, *args: Any) -> BuildResult:
        if self.error is not None or self.corim is None:
            return self
        return getattr(self.corim, operation)(*args)
