"""CoRIM domain models."""

from .aggregate import UnsignedCorim
from .hash_entry import HashEntry
from .profile import Profile
from .result import BuildResult
from .tag_id import TagID
from .value import Locator, Tag, TagKind

__all__ = [
    "BuildResult",
    "HashEntry",
    "Locator",
    "Profile",
    "Tag",
    "TagID",
    "TagKind",
    "UnsignedCorim",
]
