"""
Custom exceptions for Label Print Panel.

Exception Hierarchy:
    LabelPanelError (base)
    ├── TransportUnavailable - spooler connect failed or dropped uncleanly
    ├── ParseFailure         - inbound spooler message did not conform
    ├── RemoteError          - vendor endpoint reported an explicit error
    ├── CapabilityAbsent     - Browser Print runtime not present
    │   └── CapabilityLoadError - runtime never signalled readiness
    ├── NotLoadedError       - capability used before load() completed
    └── DeviceNotFound       - printer id no longer resolves

Usage:
    The channel manager and the panel service convert these into status
    reports or {'success': False, 'error': ...} results. Only the capability
    loader raises them to its caller.
"""

from typing import Optional, Dict, Any


class LabelPanelError(Exception):
    """
    Base exception for all Label Print Panel errors.

    Args:
        message: Human-readable error message
        details: Optional dictionary with additional context for debugging
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class TransportUnavailable(LabelPanelError):
    """The spooler WebSocket could not be reached or dropped uncleanly."""

    def __init__(self, url: str, reason: str = ""):
        message = f"Spooler unavailable at {url}"
        if reason:
            message = f"{message}: {reason}"
        details = {
            "url": url,
            "resolution": "Ensure the SATO All-In-One Tool is running",
        }
        super().__init__(message, details)
        self.url = url


class ParseFailure(LabelPanelError):
    """An inbound spooler message matched none of the known shapes."""

    def __init__(self, raw: Any):
        super().__init__("Unrecognized spooler message", {"raw": str(raw)[:200]})
        self.raw = raw


class RemoteError(LabelPanelError):
    """The vendor endpoint answered with an explicit error."""

    def __init__(self, error: str):
        super().__init__(f"Error: {error}", {"remote_error": error})
        self.error = error


class CapabilityAbsent(LabelPanelError):
    """
    The Zebra Browser Print runtime is not available.

    Typical causes:
    - Browser Print desktop service not installed or not running
    - LABEL_PANEL_BROWSER_PRINT_URL points at the wrong host/port
    """

    def __init__(self, message: str = "Browser Print SDK not found",
                 details: Optional[Dict[str, Any]] = None):
        error_details = details or {}
        error_details.setdefault(
            "resolution", "Ensure the Zebra Browser Print service is running"
        )
        super().__init__(message, error_details)


class CapabilityLoadError(CapabilityAbsent):
    """The capability never signalled readiness during load()."""

    def __init__(self, source: str, reason: str = ""):
        message = f"Failed to load Browser Print from: {source}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, {"source": source})
        self.source = source


class NotLoadedError(LabelPanelError):
    """enumerate_devices() or test_connection() called before load()."""

    def __init__(self, message: str = "Browser Print not loaded"):
        super().__init__(message, {"resolution": "Call load() first"})


class DeviceNotFound(LabelPanelError):
    """The selected printer id does not resolve to a known device."""

    def __init__(self, printer_id: Optional[str]):
        if printer_id:
            message = f"Printer not found: {printer_id}"
        else:
            message = "No printer selected"
        super().__init__(message, {"printer_id": printer_id})
        self.printer_id = printer_id
