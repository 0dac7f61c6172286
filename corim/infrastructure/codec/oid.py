"""BER contents encoding of object identifiers (no tag/length header), as carried in CBOR tag 111."""


def encode_oid(dotted: str) -> bytes:
    arcs = [int(a) for a in dotted.split(".")]
    if len(arcs) < 2:
        raise ValueError(f"OID {dotted!r} needs at least two arcs")
    out = bytearray(_base128(arcs[0] * 40 + arcs[1]))
    for arc in arcs[2:]:
        out += _base128(arc)
    return bytes(out)


def decode_oid(data: bytes) -> str:
    if not data:
        raise ValueError("empty OID")
    if data[-1] & 0x80:
        raise ValueError("truncated OID")

    values: list[int] = []
    current = 0
    for i, b in enumerate(data):
        if current == 0 and b == 0x80 and (i == 0 or not data[i - 1] & 0x80):
            raise ValueError("non-minimal OID arc encoding")
        current = (current << 7) | (b & 0x7F)
        if not b & 0x80:
            values.append(current)
            current = 0

    first = values[0]
    if first < 40:
        arcs = [0, first]
    elif first < 80:
        arcs = [1, first - 40]
    else:
        arcs = [2, first - 80]
    arcs.extend(values[1:])
    return ".".join(str(a) for a in arcs)


def _base128(n: int) -> bytes:
    chunks = [n & 0x7F]
    n >>= 7
    while n:
        chunks.append(0x80 | (n & 0x7F))
        n >>= 7
    return bytes(reversed(chunks))
