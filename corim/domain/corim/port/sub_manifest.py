"""Port for sub-manifest documents (CoMID, CoSWID) embedded in a CoRIM."""

from abc import abstractmethod
from typing import Protocol

from corim.domain.shared.port import Port


class SubManifest(Port, Protocol):
    """A sub-manifest document that can check itself and encode itself to CBOR."""

    @abstractmethod
    def validate(self) -> None:
        """Raise if the document is not valid in its own format."""
        ...

    @abstractmethod
    def to_cbor(self) -> bytes:
        """Return the untagged CBOR encoding of the document."""
        ...
