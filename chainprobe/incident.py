"""
Incident model and encoder.

An incident is built right before it is reported and is serialized to
compact JSON in one piece. Key order on the wire:

    severity, message, address (if set), tx_hash (if set), data (if set)

data is either opaque bytes (rendered as base64) or an IncidentDataStruct
(rendered as a nested object). Numbers are always rendered as floats, so
42 becomes 42.0.

Example:
    data = IncidentDataStruct()
    data.add_number("number", 42)
    data.add_list("list", [StringDataValue("first"), StringDataValue("second")])

    Incident(IncidentSeverity.ALERT, "Suspicious call", data).to_json()
    # {"severity":"alert","message":"Suspicious call","data":{"number":42.0,"list":["first","second"]}}
"""

import base64
import json
import math
from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum
from typing import Any, Dict, List, Optional, Union

from chainprobe.errors import IncidentEncodeError


class IncidentSeverity(IntEnum):
    """Incident severity levels, ordered."""
    INFO = 0
    WARNING = 1
    ERROR = 2
    ALERT = 3

    @property
    def wire_name(self) -> str:
        return self.name.lower()

    @classmethod
    def from_wire(cls, name: str) -> Optional["IncidentSeverity"]:
        try:
            return cls[name.upper()]
        except KeyError:
            return None


# =============================================================================
# Data Values
# =============================================================================

class IncidentDataValue:
    """Leaf or nested value inside incident data."""

    def to_json_value(self) -> Any:
        raise NotImplementedError


class NullDataValue(IncidentDataValue):
    def to_json_value(self) -> Any:
        return None


@dataclass
class NumberDataValue(IncidentDataValue):
    value: float

    def to_json_value(self) -> Any:
        number = float(self.value)
        if not math.isfinite(number):
            raise IncidentEncodeError(f"cannot encode non-finite number {number}")
        return number


@dataclass
class StringDataValue(IncidentDataValue):
    value: str

    def to_json_value(self) -> Any:
        return self.value


@dataclass
class BooleanDataValue(IncidentDataValue):
    value: bool

    def to_json_value(self) -> Any:
        return bool(self.value)


@dataclass
class StructDataValue(IncidentDataValue):
    value: "IncidentDataStruct"

    def to_json_value(self) -> Any:
        return self.value.to_dict()


@dataclass
class ListDataValue(IncidentDataValue):
    value: List[IncidentDataValue]

    def to_json_value(self) -> Any:
        return [item.to_json_value() for item in self.value]


class IncidentDataStruct:
    """
    Named fields of custom incident data, in insertion order.

    add_* methods return False, leaving the existing value untouched, when
    the field name is already taken.
    """

    def __init__(self):
        self.fields: Dict[str, IncidentDataValue] = {}

    def add_null(self, name: str) -> bool:
        return self.add_field(name, NullDataValue())

    def add_number(self, name: str, value: float) -> bool:
        return self.add_field(name, NumberDataValue(value))

    def add_string(self, name: str, value: str) -> bool:
        return self.add_field(name, StringDataValue(value))

    def add_boolean(self, name: str, value: bool) -> bool:
        return self.add_field(name, BooleanDataValue(value))

    def add_struct(self, name: str, value: "IncidentDataStruct") -> bool:
        return self.add_field(name, StructDataValue(value))

    def add_list(self, name: str, value: List[IncidentDataValue]) -> bool:
        return self.add_field(name, ListDataValue(list(value)))

    def add_field(self, name: str, value: IncidentDataValue) -> bool:
        if name in self.fields:
            return False
        self.fields[name] = value
        return True

    def __len__(self) -> int:
        return len(self.fields)

    def to_dict(self) -> Dict[str, Any]:
        return {name: value.to_json_value() for name, value in self.fields.items()}

    def to_json(self) -> str:
        return _dumps(self.to_dict())


# =============================================================================
# Incident
# =============================================================================

IncidentData = Union[bytes, IncidentDataStruct]


@dataclass
class Incident:
    """Outbound report of a detected condition."""
    severity: IncidentSeverity
    message: str
    data: Optional[IncidentData] = None
    address: str = ""
    tx_hash: str = ""

    def to_dict(self, report_empty_data: bool = True) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "severity": self.severity.wire_name,
            "message": self.message,
        }
        if self.address:
            payload["address"] = self.address
        if self.tx_hash:
            payload["tx_hash"] = self.tx_hash

        data = self.data
        if isinstance(data, IncidentDataStruct):
            if len(data) or report_empty_data:
                payload["data"] = data.to_dict()
        elif data:
            payload["data"] = base64.b64encode(bytes(data)).decode("ascii")

        return payload

    def to_json(self, report_empty_data: bool = True) -> str:
        return _dumps(self.to_dict(report_empty_data))


# Integral floats in this range are written out in full, from their shortest
# digits plus a trailing ".0"; repr would switch to exponent form from 1e16.
_PLAIN_INTEGRAL_RANGE = (1e16, 1e21)


def _format_number(number: float) -> str:
    if not math.isfinite(number):
        raise IncidentEncodeError(f"cannot encode non-finite number {number}")
    low, high = _PLAIN_INTEGRAL_RANGE
    if number.is_integer() and low <= abs(number) < high:
        return f"{Decimal(repr(number)):f}.0"
    return repr(number)


def _dumps(value: Any) -> str:
    """Compact JSON; numbers always carry a fractional part."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(float(value))
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, dict):
        return "{" + ",".join(f"{_dumps(str(k))}:{_dumps(v)}" for k, v in value.items()) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_dumps(item) for item in value) + "]"
    raise IncidentEncodeError(f"cannot encode {type(value).__name__} in incident")
