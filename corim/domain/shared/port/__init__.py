from typing import Protocol


class Port(Protocol):
    """Marker base for collaborator interfaces implemented outside the domain."""
