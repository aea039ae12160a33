"""Typed accessors over resource property bags.

Resource properties travel as JSON objects keyed by PascalCase names. A string
property may be a resolved reference to another resource,
{"$ref": "...", "$value": "ocid1..."}; until the orchestrator resolves it the
reference carries no $value and the property counts as absent.
"""

import json
from typing import Any, Dict, List, Mapping, Optional

from oci_provisioner.errors import PropertyError


def parse_properties(raw: Optional[str]) -> Dict[str, Any]:
    """Decode a serialized property bag.

    Raises:
        PropertyError: The payload is not a JSON object
    """
    try:
        props = json.loads(raw or "{}")
    except ValueError as e:
        raise PropertyError(f"failed to parse properties: {e}") from e
    if not isinstance(props, dict):
        raise PropertyError("failed to parse properties: expected a JSON object")
    return props


def serialize_properties(props: Mapping[str, Any]) -> str:
    return json.dumps(props, sort_keys=True)


def _string_value(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        resolved = value.get("$value")
        if isinstance(resolved, str) and resolved:
            return resolved
    return None


def extract_string(props: Mapping[str, Any], key: str) -> Optional[str]:
    """Return a non-empty string property, unwrapping resolved references."""
    return _string_value(props.get(key))


def require_string(props: Mapping[str, Any], key: str) -> str:
    value = extract_string(props, key)
    if value is None:
        raise PropertyError(f"{key} is required")
    return value


def extract_bool(props: Mapping[str, Any], key: str) -> Optional[bool]:
    value = props.get(key)
    return value if isinstance(value, bool) else None


def extract_int(props: Mapping[str, Any], key: str) -> Optional[int]:
    value = props.get(key)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def extract_float(props: Mapping[str, Any], key: str) -> Optional[float]:
    value = props.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def extract_string_list(props: Mapping[str, Any], key: str) -> Optional[List[str]]:
    """Return a non-empty list of strings, or None if any element is not one."""
    values = props.get(key)
    if not isinstance(values, list) or not values:
        return None
    result = []
    for value in values:
        item = _string_value(value)
        if item is None:
            return None
        result.append(item)
    return result


def freeform_tags_to_list(tags: Optional[Mapping[str, str]]) -> Optional[List[Dict[str, str]]]:
    """Convert freeform tags to a list of {"Key", "Value"} sorted by key."""
    if tags is None:
        return None
    return [{"Key": key, "Value": tags[key]} for key in sorted(tags)]


def defined_tags_to_list(
    tags: Optional[Mapping[str, Mapping[str, Any]]],
) -> Optional[List[Dict[str, Any]]]:
    """Convert defined tags to a list of {"Namespace", "Key", "Value"}.

    Sorted by namespace, then key.
    """
    if tags is None:
        return None
    result = []
    for namespace in sorted(tags):
        values = tags[namespace] or {}
        for key in sorted(values):
            result.append({"Namespace": namespace, "Key": key, "Value": values[key]})
    return result


def extract_freeform_tags(props: Mapping[str, Any], key: str = "FreeformTags") -> Optional[Dict[str, str]]:
    """Read freeform tags given either as a mapping or in list form."""
    value = props.get(key)
    tags: Dict[str, str] = {}
    if isinstance(value, dict):
        tags = {str(k): str(v) for k, v in value.items()}
    elif isinstance(value, list):
        for item in value:
            if isinstance(item, dict) and "Key" in item:
                tags[str(item["Key"])] = str(item.get("Value", ""))
    return tags or None


def extract_defined_tags(
    props: Mapping[str, Any], key: str = "DefinedTags"
) -> Optional[Dict[str, Dict[str, Any]]]:
    """Read defined tags given either as a nested mapping or in list form."""
    value = props.get(key)
    tags: Dict[str, Dict[str, Any]] = {}
    if isinstance(value, dict):
        for namespace, values in value.items():
            if isinstance(values, dict):
                tags[namespace] = dict(values)
    elif isinstance(value, list):
        for item in value:
            if isinstance(item, dict) and "Namespace" in item and "Key" in item:
                tags.setdefault(item["Namespace"], {})[item["Key"]] = item.get("Value")
    return tags or None


def extract_tag_fields(props: Mapping[str, Any]) -> Dict[str, Any]:
    """SDK keyword arguments for the tags present in props."""
    fields = {
        "freeform_tags": extract_freeform_tags(props),
        "defined_tags": extract_defined_tags(props),
    }
    return {k: v for k, v in fields.items() if v is not None}
