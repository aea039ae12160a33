"""Unit tests for property accessors and tag conversion."""

import pytest

from oci_provisioner.errors import PropertyError
from oci_provisioner.provisioners.properties import (
    defined_tags_to_list,
    extract_bool,
    extract_defined_tags,
    extract_float,
    extract_freeform_tags,
    extract_int,
    extract_string,
    extract_string_list,
    extract_tag_fields,
    freeform_tags_to_list,
    parse_properties,
    require_string,
)


@pytest.mark.unit
class TestExtractString:
    def test_plain_string(self):
        assert extract_string({"Name": "vol"}, "Name") == "vol"

    def test_resolved_reference(self):
        props = {"VcnId": {"$ref": "formae://vcn#/Id", "$value": "ocid1.vcn.1"}}
        assert extract_string(props, "VcnId") == "ocid1.vcn.1"

    def test_unresolved_reference_is_absent(self):
        assert extract_string({"VcnId": {"$ref": "formae://vcn#/Id"}}, "VcnId") is None

    @pytest.mark.parametrize("value", ["", 12, None, ["a"]])
    def test_other_values_are_absent(self, value):
        assert extract_string({"Name": value}, "Name") is None

    def test_require_string(self):
        assert require_string({"Name": "x"}, "Name") == "x"
        with pytest.raises(PropertyError, match="Name is required"):
            require_string({}, "Name")


@pytest.mark.unit
class TestScalarAccessors:
    def test_extract_bool(self):
        assert extract_bool({"A": False}, "A") is False
        assert extract_bool({"A": "true"}, "A") is None

    def test_extract_int(self):
        assert extract_int({"Size": 50.0}, "Size") == 50
        assert extract_int({"Size": True}, "Size") is None
        assert extract_int({}, "Size") is None

    def test_extract_float(self):
        assert extract_float({"Ocpus": 2}, "Ocpus") == 2.0
        assert extract_float({"Ocpus": 1.5}, "Ocpus") == 1.5
        assert extract_float({"Ocpus": False}, "Ocpus") is None
        assert extract_float({"Ocpus": "2"}, "Ocpus") is None

    def test_extract_string_list(self):
        props = {"Ids": ["a", {"$value": "b"}]}
        assert extract_string_list(props, "Ids") == ["a", "b"]
        assert extract_string_list({"Ids": ["a", 1]}, "Ids") is None
        assert extract_string_list({"Ids": []}, "Ids") is None

    def test_parse_properties(self):
        assert parse_properties('{"a": 1}') == {"a": 1}
        assert parse_properties(None) == {}
        with pytest.raises(PropertyError):
            parse_properties("[1]")


@pytest.mark.unit
class TestTags:
    def test_freeform_tags_sorted(self):
        assert freeform_tags_to_list({"b": "2", "a": "1"}) == [
            {"Key": "a", "Value": "1"},
            {"Key": "b", "Value": "2"},
        ]

    def test_none_stays_none(self):
        assert freeform_tags_to_list(None) is None
        assert defined_tags_to_list(None) is None

    def test_defined_tags_sorted_by_namespace_then_key(self):
        tags = {"ops": {"z": 1, "a": 2}, "finance": {"cost": "c1"}}
        assert defined_tags_to_list(tags) == [
            {"Namespace": "finance", "Key": "cost", "Value": "c1"},
            {"Namespace": "ops", "Key": "a", "Value": 2},
            {"Namespace": "ops", "Key": "z", "Value": 1},
        ]

    def test_extract_freeform_tags_accepts_both_forms(self):
        as_list = {"FreeformTags": [{"Key": "env", "Value": "dev"}]}
        as_map = {"FreeformTags": {"env": "dev"}}
        assert extract_freeform_tags(as_list) == {"env": "dev"}
        assert extract_freeform_tags(as_map) == {"env": "dev"}
        assert extract_freeform_tags({}) is None

    def test_extract_defined_tags_accepts_both_forms(self):
        as_list = {"DefinedTags": [{"Namespace": "ops", "Key": "a", "Value": 1}]}
        as_map = {"DefinedTags": {"ops": {"a": 1}}}
        assert extract_defined_tags(as_list) == {"ops": {"a": 1}}
        assert extract_defined_tags(as_map) == {"ops": {"a": 1}}

    def test_extract_tag_fields_skips_absent_tags(self):
        props = {"FreeformTags": {"env": "dev"}}
        assert extract_tag_fields(props) == {"freeform_tags": {"env": "dev"}}
        assert extract_tag_fields({}) == {}
