"""Unsigned CoRIM (Concise Reference Integrity Manifest) container with CBOR and JSON codecs."""

from corim.domain.corim.model.aggregate import UnsignedCorim
from corim.domain.corim.model.hash_entry import HashEntry
from corim.domain.corim.model.profile import Profile
from corim.domain.corim.model.result import BuildResult
from corim.domain.corim.model.tag_id import TagID
from corim.domain.corim.model.value import Locator, Tag, TagKind
from corim.domain.corim.port.sub_manifest import SubManifest
from corim.domain.shared.error import (
    BuildError,
    CodecError,
    ConfigurationError,
    CorimError,
    CorimValidationError,
    ValidationCategory,
)
from corim.infrastructure.codec import CborCodec, CodecConfig, JsonCodec

__version__ = "0.1.0"

__all__ = [
    "BuildError",
    "BuildResult",
    "CborCodec",
    "CodecConfig",
    "CodecError",
    "ConfigurationError",
    "CorimError",
    "CorimValidationError",
    "HashEntry",
    "JsonCodec",
    "Locator",
    "Profile",
    "SubManifest",
    "Tag",
    "TagID",
    "TagKind",
    "UnsignedCorim",
    "ValidationCategory",
]
