"""Unit tests for the UnsignedCorim aggregate: builder operations and validation."""

import cbor2
import pytest

from corim import (
    BuildError,
    BuildResult,
    CorimValidationError,
    HashEntry,
    Tag,
    TagID,
    TagKind,
    UnsignedCorim,
    ValidationCategory,
)


class TestSetId:
    def test_set_id_from_string(self):
        """A plain non-empty string is kept as a string id."""
        result = UnsignedCorim().set_id("acme-corim-1")

        assert result.ok
        assert result.unwrap().get_id() == "acme-corim-1"
        assert not result.unwrap().id.is_uuid

    def test_set_id_from_uuid_string_normalizes(self, corim_id):
        """A UUID-shaped string is stored in UUID form."""
        corim = UnsignedCorim().set_id(corim_id.upper()).unwrap()

        assert corim.id.is_uuid
        assert corim.get_id() == corim_id

    def test_set_id_from_uuid_bytes(self):
        raw = bytes(range(16))
        corim = UnsignedCorim().set_id(raw).unwrap()

        assert corim.get_id() == "00010203-0405-0607-0809-0a0b0c0d0e0f"

    def test_set_id_empty_string_fails(self):
        """An empty string cannot be normalized and leaves the id unset."""
        corim = UnsignedCorim()
        result = corim.set_id("")

        assert not result
        assert isinstance(result.error, BuildError)
        assert result.error.operation == "set_id"
        assert corim.id.is_empty

    def test_set_id_wrong_byte_length_fails(self):
        result = UnsignedCorim().set_id(b"\x00\x01")

        assert not result.ok
        assert "16 bytes" in result.error.message

    def test_set_id_failure_keeps_previous_id(self):
        corim = UnsignedCorim().set_id("first").unwrap()
        corim.set_id(42)

        assert corim.get_id() == "first"


class TestAddSubManifest:
    def test_comid_prefix_is_bit_exact(self, comid):
        """CoMIDs are written as d9 01 fa followed by their encoding."""
        corim = UnsignedCorim().add_comid(comid).unwrap()

        tag = bytes(corim.tags[0])
        assert tag[:3] == bytes([0xD9, 0x01, 0xFA])
        assert tag[3:] == comid.to_cbor()

    def test_coswid_prefix_is_bit_exact(self, coswid):
        """CoSWIDs are written as d9 01 f9 followed by their encoding."""
        corim = UnsignedCorim().add_coswid(coswid).unwrap()

        tag = bytes(corim.tags[0])
        assert tag[:3] == bytes([0xD9, 0x01, 0xF9])
        assert tag[3:] == coswid.to_cbor()

    def test_prefixed_tag_decodes_as_cbor_tag(self, comid):
        """The prefix is a real CBOR tag header around the sub-manifest."""
        corim = UnsignedCorim().add_sub_manifest(comid, TagKind.COMID).unwrap()

        decoded = cbor2.loads(bytes(corim.tags[0]))
        assert decoded.tag == 506
        assert decoded.value == comid.body

    def test_insertion_order_is_preserved(self, comid, coswid):
        corim = UnsignedCorim().add_coswid(coswid).add_comid(comid).unwrap()

        assert [t.kind for t in corim.tags] == [TagKind.COSWID, TagKind.COMID]

    def test_invalid_sub_manifest_is_rejected(self, comid, invalid_comid):
        """A document failing its own validator does not change the tag list."""
        corim = UnsignedCorim().add_comid(comid).unwrap()

        result = corim.add_comid(invalid_comid)

        assert not result.ok
        assert result.error.operation == "add_comid"
        assert "validation failed" in result.error.message
        assert isinstance(result.error.__cause__, ValueError)
        assert len(corim.tags) == 1

    def test_encoding_failure_is_rejected(self, unencodable_coswid):
        corim = UnsignedCorim()

        result = corim.add_coswid(unencodable_coswid)

        assert not result.ok
        assert "encoding failed" in result.error.message
        assert corim.tags == []


class TestAddDependentRim:
    def test_list_is_created_lazily(self):
        corim = UnsignedCorim()
        assert corim.dependent_rims is None

        corim.add_dependent_rim("https://example.org/rim.cbor")

        assert corim.dependent_rims is not None
        assert corim.dependent_rims[0].href == "https://example.org/rim.cbor"
        assert corim.dependent_rims[0].thumbprint is None

    def test_no_validation_at_construction(self):
        """Empty hrefs and bad thumbprints are accepted here and caught by validate()."""
        bad = HashEntry(alg_id=1, value=b"short")
        result = UnsignedCorim().add_dependent_rim("", bad)

        assert result.ok
        assert result.unwrap().dependent_rims[0].thumbprint == bad

    def test_order_is_preserved(self):
        corim = (
            UnsignedCorim()
            .add_dependent_rim("https://a.example")
            .add_dependent_rim("https://b.example")
            .unwrap()
        )
        assert [loc.href for loc in corim.dependent_rims] == ["https://a.example", "https://b.example"]


class TestAddProfile:
    def test_oid_profile(self):
        corim = UnsignedCorim().add_profile("2.16.840.1.101.3.4").unwrap()

        assert corim.profiles[0].is_oid
        assert corim.profiles[0].oid == "2.16.840.1.101.3.4"

    def test_uri_profile(self):
        corim = UnsignedCorim().add_profile("https://example.org/profile").unwrap()

        assert corim.profiles[0].is_uri

    def test_garbage_profile_fails_without_creating_list(self):
        corim = UnsignedCorim()

        result = corim.add_profile("not-a-uri-not-an-oid")

        assert not result.ok
        assert result.error.operation == "add_profile"
        assert corim.profiles is None

    def test_non_string_profile_fails(self):
        corim = UnsignedCorim()

        result = corim.add_profile(None)

        assert not result.ok
        assert result.error.operation == "add_profile"
        assert corim.profiles is None


class TestBuildResultChaining:
    def test_chain_returns_same_container(self, comid):
        corim = UnsignedCorim()
        result = corim.set_id("x").add_comid(comid).add_profile("https://example.org/p")

        assert isinstance(result, BuildResult)
        assert result.corim is corim

    def test_chain_short_circuits_after_failure(self, comid):
        """Once a step fails, later steps are skipped and the first error is kept."""
        corim = UnsignedCorim()
        result = corim.set_id("x").add_profile("nope").add_comid(comid).add_dependent_rim("https://a")

        assert not result.ok
        assert result.error.operation == "add_profile"
        assert corim.tags == []
        assert corim.dependent_rims is None

    def test_unwrap_raises_build_error(self):
        result = UnsignedCorim().set_id("")

        with pytest.raises(BuildError):
            result.unwrap()

    def test_unwrap_without_container_raises_build_error(self):
        with pytest.raises(BuildError) as exc_info:
            BuildResult().unwrap()
        assert exc_info.value.operation == "unwrap"


class TestValidate:
    def test_valid_container(self, full_corim):
        assert full_corim.validate() is None

    def test_empty_container_reports_empty_id(self):
        with pytest.raises(CorimValidationError) as exc_info:
            UnsignedCorim().validate()

        assert exc_info.value.category == ValidationCategory.ID
        assert exc_info.value.message == "empty id"
        assert exc_info.value.position is None

    def test_id_only_reports_no_tags(self):
        corim = UnsignedCorim().set_id("acme").unwrap()

        with pytest.raises(CorimValidationError) as exc_info:
            corim.validate()

        assert exc_info.value.category == ValidationCategory.TAGS
        assert exc_info.value.cause == "no tags"

    def test_empty_tag_reports_its_position(self, comid):
        corim = UnsignedCorim().set_id("acme").add_comid(comid).unwrap()
        corim.tags.append(Tag(b""))

        with pytest.raises(CorimValidationError) as exc_info:
            corim.validate()

        assert exc_info.value.category == ValidationCategory.TAG
        assert exc_info.value.position == 1
        assert exc_info.value.cause == "empty tag"
        assert str(exc_info.value) == "tag validation failed at pos 1: empty tag"

    def test_empty_href_reports_dependent_rim(self, comid):
        corim = UnsignedCorim().set_id("acme").add_comid(comid).add_dependent_rim("").unwrap()

        with pytest.raises(CorimValidationError) as exc_info:
            corim.validate()

        assert exc_info.value.category == ValidationCategory.DEPENDENT_RIM
        assert exc_info.value.position == 0
        assert exc_info.value.cause == "empty href"

    def test_bad_thumbprint_reports_dependent_rim(self, comid):
        corim = (
            UnsignedCorim()
            .set_id("acme")
            .add_comid(comid)
            .add_dependent_rim("https://ok.example")
            .add_dependent_rim("https://bad.example", HashEntry(alg_id=1, value=b"\x00" * 31))
            .unwrap()
        )

        with pytest.raises(CorimValidationError) as exc_info:
            corim.validate()

        assert exc_info.value.position == 1
        assert exc_info.value.cause.startswith("invalid locator thumbprint:")

    def test_profile_with_neither_form(self, comid):
        from corim import Profile

        corim = UnsignedCorim().set_id("acme").add_comid(comid).unwrap()
        corim.profiles = [Profile(uri="https://example.org/p"), Profile()]

        with pytest.raises(CorimValidationError) as exc_info:
            corim.validate()

        assert exc_info.value.category == ValidationCategory.PROFILE
        assert exc_info.value.position == 1
        assert exc_info.value.cause == "profile should be OID or URI"

    @pytest.mark.parametrize("profile", [{"uri": ""}, {"oid": ""}, {"uri": "no scheme"}, {"oid": "1"}])
    def test_malformed_profile_reports_profile(self, comid, profile):
        """Profiles that could not survive an encode/decode cycle are rejected."""
        from corim import Profile

        corim = UnsignedCorim().set_id("acme").add_comid(comid).unwrap()
        corim.profiles = [Profile(**profile)]

        with pytest.raises(CorimValidationError) as exc_info:
            corim.validate()

        assert exc_info.value.category == ValidationCategory.PROFILE
        assert exc_info.value.position == 0
        assert exc_info.value.cause.startswith("invalid profile")

    def test_empty_id_wins_over_no_tags(self):
        """Only the first failing category is reported."""
        corim = UnsignedCorim(id=TagID(), tags=[])

        with pytest.raises(CorimValidationError) as exc_info:
            corim.validate()

        assert exc_info.value.category == ValidationCategory.ID
        assert "no tags" not in str(exc_info.value)

    def test_tag_error_wins_over_later_categories(self):
        """A bad tag is reported even if locators and profiles are also bad."""
        from corim import Profile

        corim = UnsignedCorim().set_id("acme").add_dependent_rim("").unwrap()
        corim.tags = [Tag(b"")]
        corim.profiles = [Profile()]

        with pytest.raises(CorimValidationError) as exc_info:
            corim.validate()

        assert exc_info.value.category == ValidationCategory.TAG
        assert exc_info.value.position == 0

    def test_validate_does_not_mutate(self, full_corim):
        before = full_corim.model_copy(deep=True)
        full_corim.validate()
        assert full_corim == before
