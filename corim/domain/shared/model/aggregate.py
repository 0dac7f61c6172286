from pydantic import BaseModel


class Aggregate(BaseModel):
    """Mutable root entity. Owns its children; nothing outside holds references into it."""
