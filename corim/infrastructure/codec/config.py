"""Configuration for the CBOR and JSON codecs."""

from corim.domain.shared.model.value import ValueObject


class CodecConfig(ValueObject):
    """Encoder/decoder options, fixed for the lifetime of a codec instance.

    Build one at startup (usually via Config().codec) and hand it to each
    codec; nothing mutates it afterwards.
    """

    canonical: bool = True  # Deterministic CBOR: shortest ints, sorted map keys
    json_indent: int | None = None  # None = compact JSON
    json_sort_keys: bool = False
    allow_unknown_keys: bool = True  # False = reject map keys outside the corim mapping
