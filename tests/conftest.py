"""Global test fixtures."""

from dataclasses import dataclass

import cbor2
import pytest

from corim import HashEntry, UnsignedCorim


@dataclass
class FakeSubManifest:
    """Stand-in for a CoMID/CoSWID document: a CBOR map with a validity switch."""

    body: dict
    valid: bool = True
    encodable: bool = True

    def validate(self) -> None:
        if not self.valid:
            raise ValueError("tag-identity: empty tag-id")

    def to_cbor(self) -> bytes:
        if not self.encodable:
            raise RuntimeError("encoder exploded")
        return cbor2.dumps(self.body, canonical=True)


@pytest.fixture
def invalid_comid() -> FakeSubManifest:
    return FakeSubManifest(body={}, valid=False)


@pytest.fixture
def unencodable_coswid() -> FakeSubManifest:
    return FakeSubManifest(body={}, encodable=False)


@pytest.fixture
def comid() -> FakeSubManifest:
    return FakeSubManifest(body={1: {0: "43BBE37F-2E61-4B33-AED3-53CFF1428B16"}, 4: {}})


@pytest.fixture
def coswid() -> FakeSubManifest:
    return FakeSubManifest(body={0: "com.acme.rrd2013-ce-sp1-v4-1-5-0", 1: "ACME Roadrunner"})


@pytest.fixture
def corim_id() -> str:
    return "5c57e8f4-46cd-421b-91c9-08cf93e13cfc"


@pytest.fixture
def full_corim(corim_id: str, comid: FakeSubManifest, coswid: FakeSubManifest) -> UnsignedCorim:
    """A structurally valid container using every field."""
    thumbprint = HashEntry(alg_id=1, value=bytes(range(32)))
    return (
        UnsignedCorim()
        .set_id(corim_id)
        .add_comid(comid)
        .add_coswid(coswid)
        .add_dependent_rim("https://parent.example/rims.cbor", thumbprint)
        .add_dependent_rim("https://sibling.example/rim.cbor")
        .add_profile("https://example.org/profile")
        .add_profile("2.16.840.1.101.3.4")
        .unwrap()
    )
