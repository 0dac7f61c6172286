import pytest

from corim.infrastructure.codec.oid import decode_oid, encode_oid


class TestOidEncoding:
    @pytest.mark.parametrize(
        "dotted, hex_contents",
        [
            ("1.2.3", "2a03"),
            ("2.16.840.1.101.3.4", "60864801650304"),
            ("1.3.6.1.4.1.4128.2100.1", "2b06010401a020903401"),
            ("2.999.3", "883703"),
        ],
    )
    def test_known_encodings(self, dotted, hex_contents):
        assert encode_oid(dotted) == bytes.fromhex(hex_contents)
        assert decode_oid(bytes.fromhex(hex_contents)) == dotted

    def test_single_arc_rejected(self):
        with pytest.raises(ValueError):
            encode_oid("1")

    @pytest.mark.parametrize("data", [b"", b"\x2a\x86", b"\x80\x01"])
    def test_malformed_contents(self, data):
        with pytest.raises(ValueError):
            decode_oid(data)
