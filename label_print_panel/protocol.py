"""
SATO Spooler Protocol
=====================

Message shapes exchanged with the SATO All-In-One Tool over its WebSocket
API. Outbound calls use the "Class.Method" naming:

    {"Method": "Driver.GetDriverList"}
    {"Method": "Driver.SendRawData",
     "Parameters": {"DriverName": "...", "Data": "<base64>"}}

Inbound frames come in four shapes. ``parse_message`` turns each into a
tagged variant so callers never sniff JSON types themselves.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Union

from .models import DeviceDescriptor

METHOD_GET_DRIVER_LIST = 'Driver.GetDriverList'
METHOD_SEND_RAW_DATA = 'Driver.SendRawData'

SATO_PREFIX = 'SATO_'


@dataclass(frozen=True)
class EnumerationReply:
    """Driver list: a bare JSON array of driver records."""
    drivers: List[Dict[str, Any]]


@dataclass(frozen=True)
class JobResult:
    """Execution result: Result/Status success marker or bare ``true``."""
    success: bool


@dataclass(frozen=True)
class ErrorReply:
    """Object carrying an ``Error`` field."""
    error: str


@dataclass(frozen=True)
class LegacyBoolean:
    """Non-JSON boolean-like text frame, e.g. ``True``."""
    value: bool


@dataclass(frozen=True)
class Unrecognized:
    """Anything else. Logged, never shown to the user."""
    raw: Any


SpoolerMessage = Union[EnumerationReply, JobResult, ErrorReply, LegacyBoolean, Unrecognized]


def build_driver_list_request() -> Dict[str, Any]:
    """Enumeration request."""
    return {'Method': METHOD_GET_DRIVER_LIST}


def build_send_raw_data(driver_name: str, data: str) -> Dict[str, Any]:
    """
    Print request.

    Args:
        driver_name: Windows driver name from the driver list
        data: Base64-encoded printer command
    """
    return {
        'Method': METHOD_SEND_RAW_DATA,
        'Parameters': {
            'DriverName': driver_name,
            'Data': data,
        },
    }


def _is_success_marker(value: Any) -> bool:
    if value is True:
        return True
    if isinstance(value, dict):
        return value.get('Result') == 'Executed' or value.get('Status') == 'Success'
    return False


def parse_message(raw: Union[str, bytes]) -> SpoolerMessage:
    """Classify one inbound spooler frame."""
    if isinstance(raw, bytes):
        raw = raw.decode('utf-8', errors='replace')

    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        if isinstance(raw, str) and raw.strip().lower() == 'true':
            return LegacyBoolean(True)
        return Unrecognized(raw)

    if isinstance(value, list):
        return EnumerationReply([d for d in value if isinstance(d, dict)])
    if _is_success_marker(value):
        return JobResult(True)
    if isinstance(value, dict) and value.get('Error'):
        return ErrorReply(str(value['Error']))
    return Unrecognized(value)


def driver_to_descriptor(record: Dict[str, Any]) -> DeviceDescriptor:
    """Map one driver-list record to a DeviceDescriptor."""
    driver_name = record.get('DriverName', '')
    port_name = record.get('PortName', '')
    online = record.get('Online')
    return DeviceDescriptor(
        id=f'{SATO_PREFIX}{port_name}',
        label=f'SATO: {driver_name}',
        vendor='sato',
        handle=driver_name,
        port_name=port_name,
        online=bool(online) if online is not None else None,
    )
