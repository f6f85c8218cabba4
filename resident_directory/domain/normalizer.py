"""Normalization of incoming resident records. Pure functions; never raises."""

from typing import Any, Dict, Mapping, Optional, Tuple

from resident_directory.domain.models.resident import (
    BUILDING,
    CAR_PLATE,
    DOOR,
    FULL_NAME,
    PERMIT_NUMBER,
    PHONE_PRIMARY,
    PHONE_SECONDARY,
    SECTION,
    ResidentDraft,
)

# attribute -> accepted input keys, in lookup order
_INPUT_KEYS: Dict[str, Tuple[str, ...]] = {
    "full_name": (FULL_NAME, "full_name"),
    "section": (SECTION,),
    "building": (BUILDING,),
    "door": (DOOR, "doorNumber"),
    "car_plate": (CAR_PLATE, "car_plate"),
    "permit_number": (PERMIT_NUMBER, "numeroDeMacaron", "permit_number"),
    "phone_primary": (PHONE_PRIMARY, "phone_primary"),
    "phone_secondary": (PHONE_SECONDARY, "phone_secondary"),
}

_CASE_FOLDED = frozenset({"full_name", "car_plate"})

_MISSING = object()


def _lookup(raw: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return _MISSING


def normalize_value(attribute: str, value: Any) -> str:
    """Coerce to text, strip, and lowercase the case-insensitive fields. None becomes ''."""
    if value is None or value is _MISSING:
        return ""
    text = str(value).strip()
    if attribute in _CASE_FOLDED:
        text = text.lower()
    return text


def normalize_car_plate(value: Any) -> str:
    return normalize_value("car_plate", value)


def normalize_resident(raw: Mapping[str, Any]) -> ResidentDraft:
    """
    Build a ResidentDraft from a loosely-typed client record.
    Missing required fields come out as '' and are rejected later by validation.
    An empty phoneSecondary collapses to None.
    """
    values = {
        attribute: normalize_value(attribute, _lookup(raw, keys))
        for attribute, keys in _INPUT_KEYS.items()
    }
    values["phone_secondary"] = values["phone_secondary"] or None
    return ResidentDraft(**values)


def normalize_changes(raw: Mapping[str, Any]) -> Dict[str, Optional[str]]:
    """Normalize only the fields present in a partial update. Keys are attribute names."""
    changes: Dict[str, Optional[str]] = {}
    for attribute, keys in _INPUT_KEYS.items():
        value = _lookup(raw, keys)
        if value is _MISSING:
            continue
        changes[attribute] = normalize_value(attribute, value)
    if "phone_secondary" in changes:
        changes["phone_secondary"] = changes["phone_secondary"] or None
    return changes
