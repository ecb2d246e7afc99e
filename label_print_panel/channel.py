"""
Spooler Channel Manager
=======================

Owns the single logical connection to the SATO All-In-One Tool spooler.

- Connects on demand: ``ensure_connected()`` is a no-op while a connection
  is opening or open, and there is no retry timer. The next print attempt
  is what reconnects after a drop.
- Holds at most one pending job while disconnected. A second submit before
  the connection opens replaces the first.
- Parses every inbound frame into a status report and, for driver lists,
  into DeviceDescriptors.

Transport failures never raise past this class; they become ERROR status
reports.
"""

import json
import threading
from typing import Any, Callable, Dict, List, Optional

from .config import SATO_WEBSOCKET_URL
from .exceptions import LabelPanelError, ParseFailure, RemoteError, TransportUnavailable
from .logging_config import get_logger
from .models import ConnectionState, DeviceDescriptor, StatusKind, StatusReport
from .models.status import IDLE
from .protocol import (
    EnumerationReply, ErrorReply, JobResult, LegacyBoolean,
    build_driver_list_request, driver_to_descriptor, parse_message,
)
from .transport import WebSocketTransport

logger = get_logger(__name__)


class ChannelManager:
    """Connection and job-dispatch state machine for the SATO spooler."""

    def __init__(self, url: str = SATO_WEBSOCKET_URL,
                 transport_factory: Callable = WebSocketTransport):
        """
        Args:
            url: Spooler WebSocket endpoint
            transport_factory: Called as factory(url, on_open, on_message,
                on_close, on_error); returns an object with connect(),
                send(text) and close()
        """
        self.url = url
        self._transport_factory = transport_factory

        self._lock = threading.RLock()
        self._state = ConnectionState.DISCONNECTED
        self._transport = None
        self._pending_job: Optional[Dict[str, Any]] = None
        self._last_error: Optional[LabelPanelError] = None

        self._status = IDLE
        self._devices: List[DeviceDescriptor] = []
        self._status_listeners: List[Callable] = []
        self._device_listeners: List[Callable] = []

    # =========================================================================
    # Observation
    # =========================================================================

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def status(self) -> StatusReport:
        return self._status

    @property
    def devices(self) -> List[DeviceDescriptor]:
        return list(self._devices)

    @property
    def pending_job(self) -> Optional[Dict[str, Any]]:
        return self._pending_job

    @property
    def last_error(self) -> Optional[LabelPanelError]:
        """Most recent transport or remote failure, for diagnostics."""
        return self._last_error

    def subscribe(self, listener: Callable[[StatusReport], None]):
        """Register a callback for every status report."""
        self._status_listeners.append(listener)

    def on_devices(self, listener: Callable[[List[DeviceDescriptor]], None]):
        """Register a callback for every driver-list reply."""
        self._device_listeners.append(listener)

    def report(self, report: StatusReport):
        """Publish a status line on the SATO feed, e.g. a lookup failure."""
        with self._lock:
            self._emit(report)

    def _emit(self, report: StatusReport):
        self._status = report
        for listener in list(self._status_listeners):
            listener(report)

    # =========================================================================
    # Commands
    # =========================================================================

    def ensure_connected(self):
        """Open a connection unless one is already opening or open."""
        with self._lock:
            if self._state in (ConnectionState.CONNECTING, ConnectionState.OPEN):
                logger.debug("Spooler connection already exists or is connecting")
                return

            self._state = ConnectionState.CONNECTING
            self._emit(StatusReport.pending("Connecting to the SATO spooler..."))
            logger.info(f"Connecting to SATO spooler at {self.url}")

            transport = self._transport_factory(
                self.url,
                self._on_open,
                self._on_message,
                self._on_close,
                self._on_error,
            )
            self._transport = transport
            try:
                transport.connect()
            except Exception as e:
                self._on_error(transport, e)

    def submit_job(self, command: Dict[str, Any]):
        """
        Send a spooler command now, or hold it until the connection opens.

        Args:
            command: Spooler message, e.g. from protocol.build_send_raw_data()
        """
        with self._lock:
            if self._state != ConnectionState.OPEN:
                if self._pending_job is not None:
                    logger.warning("Replacing pending spooler job that was never sent")
                self._pending_job = command
                self._emit(StatusReport.pending("Reconnecting before printing..."))
                self.ensure_connected()
                return

            self._emit(StatusReport.pending("Sending print command..."))
            self._send(self._transport, command)

    def request_devices(self):
        """Ask the spooler for its driver list."""
        with self._lock:
            if self._state != ConnectionState.OPEN:
                self.ensure_connected()
                return

            self._emit(StatusReport.pending("Requesting printer list..."))
            self._send(self._transport, build_driver_list_request())

    def teardown(self):
        """Close the connection. Any pending job is discarded."""
        with self._lock:
            self._pending_job = None
            if self._state not in (ConnectionState.CONNECTING, ConnectionState.OPEN):
                return

            self._state = ConnectionState.CLOSING
            logger.info("Closing SATO spooler connection")
            self._close_quietly(self._transport)

    def _close_quietly(self, transport):
        try:
            transport.close()
        except Exception as e:
            logger.debug(f"Error while closing spooler connection: {e}")

    def _send(self, transport, command: Dict[str, Any]) -> bool:
        try:
            transport.send(json.dumps(command))
            logger.debug(f"Sent spooler command {command.get('Method')}")
            return True
        except Exception as e:
            logger.error(f"Failed to send spooler command: {e}")
            self._emit(StatusReport.error("Failed to send command to the SATO spooler."))
            return False

    # =========================================================================
    # Transport events
    # =========================================================================

    def _is_active(self, transport) -> bool:
        if transport is not self._transport:
            logger.debug("Ignoring event from a replaced spooler connection")
            return False
        return True

    def _on_open(self, transport):
        with self._lock:
            if not self._is_active(transport):
                return
            if self._state == ConnectionState.CLOSING:
                logger.debug("Spooler connection opened after teardown; closing it")
                self._close_quietly(transport)
                return

            self._state = ConnectionState.OPEN
            logger.info("SATO spooler connection established")

            if self._pending_job is not None:
                job, self._pending_job = self._pending_job, None
                self._emit(StatusReport.pending("Connected. Sending print command..."))
                self._send(transport, job)
            else:
                self._emit(StatusReport.pending("Connected. Requesting printer list..."))
                self._send(transport, build_driver_list_request())

    def _on_message(self, transport, raw):
        with self._lock:
            if not self._is_active(transport):
                return
            if self._state == ConnectionState.CLOSING:
                logger.debug("Ignoring message on a closing spooler connection")
                return

            message = parse_message(raw)

            if isinstance(message, EnumerationReply):
                self._devices = [driver_to_descriptor(d) for d in message.drivers]
                for listener in list(self._device_listeners):
                    listener(self.devices)
                self._emit(StatusReport.success(f"{len(self._devices)} printers found"))
            elif isinstance(message, (JobResult, LegacyBoolean)):
                self._emit(StatusReport.success("Print succeeded!"))
            elif isinstance(message, ErrorReply):
                self._last_error = RemoteError(message.error)
                self._emit(StatusReport.error(self._last_error.message))
            else:
                logger.info(f"Ignoring message: {ParseFailure(raw)}")

    def _on_close(self, transport, was_clean: bool):
        with self._lock:
            if not self._is_active(transport):
                return

            self._state = ConnectionState.DISCONNECTED
            self._transport = None
            logger.info("SATO spooler connection closed")

            if not was_clean and self._status.kind != StatusKind.SUCCESS:
                self._last_error = TransportUnavailable(self.url, "connection dropped")
                self._emit(StatusReport.error(
                    "Connection to the SATO spooler was lost. Check the SATO All-In-One Tool."
                ))

    def _on_error(self, transport, error):
        with self._lock:
            if not self._is_active(transport):
                return

            self._last_error = TransportUnavailable(self.url, str(error))
            logger.error(f"SATO spooler connection error: {self._last_error}")
            self._state = ConnectionState.DISCONNECTED
            self._transport = None
            self._close_quietly(transport)
            self._emit(StatusReport.error(
                "Connection error. Make sure the SATO All-In-One Tool is running."
            ))
