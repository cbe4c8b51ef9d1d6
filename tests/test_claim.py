"""Tests for UriClaim construction, projection and the raw accessor."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from catu import InvalidCatuError, MatchLabels, UriClaim

NAMED = {
    "path": {"prefix-match": "/content/"},
    "extension": {"exact-match": ".m3u8", "suffix-match": "8"},
    "query": {"regex-match": ["a=.*"]},
}
LABELED = {3: {1: "/content/"}, 8: {0: ".m3u8", 2: "8"}, 4: {4: ["a=.*"]}}


class TestFromDict:
    def test_translates_names_to_labels(self) -> None:
        assert UriClaim.from_dict(NAMED).payload == LABELED

    def test_preserves_insertion_order(self) -> None:
        claim = UriClaim.from_dict(NAMED)
        assert list(claim.payload) == [3, 8, 4]
        assert list(claim.payload[8]) == [0, 2]

    def test_unknown_part_rejected(self) -> None:
        with pytest.raises(InvalidCatuError, match="Unknown URI part"):
            UriClaim.from_dict({"fragment": {"exact-match": "x"}})

    def test_unknown_match_type_rejected(self) -> None:
        with pytest.raises(InvalidCatuError, match="Unknown match type"):
            UriClaim.from_dict({"path": {"glob-match": "/*"}})

    def test_non_dict_rules_rejected(self) -> None:
        with pytest.raises(InvalidCatuError, match="must be a dict"):
            UriClaim.from_dict({"path": [("exact-match", "/")]})  # type: ignore[dict-item]

    def test_non_dict_claim_rejected(self) -> None:
        with pytest.raises(InvalidCatuError, match="Expected dict"):
            UriClaim.from_dict([])  # type: ignore[arg-type]

    def test_custom_labels(self) -> None:
        labels = MatchLabels.of({"starts-with": 10})
        claim = UriClaim.from_dict({"host": {"starts-with": "cdn"}}, labels)
        assert claim.payload == {1: {10: "cdn"}}


class TestFromDictTags:
    def test_int_keys(self) -> None:
        assert UriClaim.from_dict_tags(LABELED).payload == LABELED

    def test_decimal_string_keys(self) -> None:
        claim = UriClaim.from_dict_tags({"3": {"1": "/content/"}, "2": {"-1": "ab"}})
        assert claim.payload == {3: {1: "/content/"}, 2: {-1: "ab"}}

    def test_unknown_part_label(self) -> None:
        with pytest.raises(InvalidCatuError, match="Unknown URI part label"):
            UriClaim.from_dict_tags({12: {0: "x"}})

    def test_unknown_match_label(self) -> None:
        with pytest.raises(InvalidCatuError, match="Unknown match type label"):
            UriClaim.from_dict_tags({3: {99: "x"}})

    def test_non_numeric_key(self) -> None:
        with pytest.raises(InvalidCatuError, match="Invalid URI part label"):
            UriClaim.from_dict_tags({"path": {0: "x"}})


class TestFromUnlabeledMap:
    def test_accepts_any_mapping(self) -> None:
        data = MappingProxyType(
            {
                "path": MappingProxyType({"prefix-match": "/content/"}),
                "extension": {"exact-match": ".m3u8", "suffix-match": "8"},
                "query": {"regex-match": ["a=.*"]},
            }
        )
        assert UriClaim.from_unlabeled_map(data).payload == LABELED

    def test_rules_must_be_mapping(self) -> None:
        with pytest.raises(InvalidCatuError, match="must be a mapping"):
            UriClaim.from_unlabeled_map({"path": "exact-match"})  # type: ignore[dict-item]


class TestFromMap:
    def test_adopts_by_reference(self) -> None:
        payload = {3: {0: "/a"}}
        claim = UriClaim.from_map(payload)
        assert claim.payload is payload

    def test_validates_labels(self) -> None:
        with pytest.raises(InvalidCatuError):
            UriClaim.from_map({3: {42: "/a"}})
        with pytest.raises(InvalidCatuError):
            UriClaim.from_map({-3: {0: "/a"}})


class TestProjection:
    def test_to_dict(self) -> None:
        assert UriClaim.from_dict_tags(LABELED).to_dict() == NAMED

    def test_round_trip(self) -> None:
        claim = UriClaim.from_dict(NAMED)
        assert UriClaim.from_dict(claim.to_dict()) == claim

    def test_projection_is_a_copy(self) -> None:
        claim = UriClaim.from_dict(NAMED)
        claim.to_dict()["path"]["prefix-match"] = "/other/"
        assert claim.payload[3][1] == "/content/"


class TestPayloadAlias:
    def test_mutation_through_payload_changes_claim(self) -> None:
        claim = UriClaim.from_dict({"path": {"exact-match": "/a"}})
        claim.payload[1] = {0: "example.com"}
        assert claim.to_dict() == {
            "path": {"exact-match": "/a"},
            "host": {"exact-match": "example.com"},
        }

    def test_equality_and_hash(self) -> None:
        assert UriClaim.from_dict(NAMED) == UriClaim.from_dict_tags(LABELED)
        assert UriClaim.from_dict(NAMED) != UriClaim()
        with pytest.raises(TypeError):
            hash(UriClaim())


class TestTopLevelShape:
    @pytest.mark.parametrize(
        "build",
        [UriClaim.from_dict_tags, UriClaim.from_unlabeled_map, UriClaim.from_map],
    )
    @pytest.mark.parametrize("data", [["path"], "path", None, 3])
    def test_non_mapping_claim_rejected(self, build, data) -> None:  # noqa: ANN001
        with pytest.raises(InvalidCatuError, match="Claim must be a mapping"):
            build(data)
