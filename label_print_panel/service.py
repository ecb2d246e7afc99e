"""
Print Panel Service
===================

Ties the panel together: the SATO channel, the Browser Print loader, the
merged printer registry and one status line per vendor.

Usage:
    with PrintPanel() as panel:
        panel.refresh()
        result = panel.print_label(PrintIntent(kind=LabelKind.QR, copies=2))
"""

from typing import Any, Dict

from .capability import CapabilityLoader
from .channel import ChannelManager
from .config import VENDORS, vendor_for_id
from .encoders import get_encoder
from .exceptions import CapabilityAbsent, DeviceNotFound
from .logging_config import get_logger
from .models import ConnectionState, DeviceDescriptor, PrintIntent, StatusReport
from .models.status import IDLE
from .protocol import build_send_raw_data
from .registry import PrinterRegistry

logger = get_logger(__name__)


class PrintPanel:
    """Mount/unmount lifecycle and vendor dispatch for print intents."""

    def __init__(self, channel: ChannelManager = None,
                 loader: CapabilityLoader = None,
                 registry: PrinterRegistry = None):
        self.channel = channel or ChannelManager()
        self.loader = loader or CapabilityLoader()
        self.registry = registry or PrinterRegistry()
        self._zebra_status = IDLE

        self.channel.on_devices(self._on_sato_devices)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self):
        """Connect to the SATO spooler and enumerate Zebra printers."""
        logger.info("Starting print panel")
        self.channel.ensure_connected()
        self.refresh_zebra_devices()

    def stop(self):
        """Release the spooler connection."""
        logger.info("Stopping print panel")
        self.channel.teardown()

    # =========================================================================
    # Status
    # =========================================================================

    @property
    def zebra_status(self) -> StatusReport:
        return self._zebra_status

    def _set_zebra_status(self, report: StatusReport):
        self._zebra_status = report
        logger.debug(f"Zebra status: {report.kind.value} - {report.message}")

    def statuses(self) -> Dict[str, StatusReport]:
        """Current status line per vendor."""
        return {
            'sato': self.channel.status,
            'zebra': self._zebra_status,
        }

    # =========================================================================
    # Discovery
    # =========================================================================

    def _on_sato_devices(self, devices):
        self.registry.update('sato', devices)

    def refresh_sato_devices(self):
        """Ask the spooler for its driver list; the reply arrives asynchronously."""
        self.channel.request_devices()

    def refresh_zebra_devices(self) -> Dict[str, Any]:
        """Load Browser Print if needed and enumerate its printers."""
        self._set_zebra_status(StatusReport.pending("Checking Browser Print SDK..."))

        try:
            self.loader.load()
        except CapabilityAbsent as e:
            logger.warning(f"Browser Print unavailable: {e.message}")
            self._set_zebra_status(StatusReport.error("Browser Print SDK not found."))
            return {'success': False, 'error': e.message}

        self._set_zebra_status(StatusReport.pending("Requesting printer list..."))
        result = self.loader.enumerate_devices()

        if not result['success']:
            self._set_zebra_status(StatusReport.error("Failed to get printers."))
            return {'success': False, 'error': result['message']}

        self.registry.update('zebra', result['devices'])
        self._set_zebra_status(StatusReport.success(result['message']))
        return {'success': True, 'count': len(result['devices'])}

    def test_zebra_connection(self) -> Dict[str, Any]:
        """Load Browser Print if needed and check that it answers."""
        try:
            self.loader.load()
        except CapabilityAbsent as e:
            return {'success': False, 'message': e.message, 'device_count': 0, 'devices': []}
        return self.loader.test_connection()

    def reset_browser_print(self):
        """Forget the loaded SDK so the next refresh loads it again."""
        logger.info("Resetting Browser Print capability")
        self.loader.cleanup()
        self._set_zebra_status(IDLE)

    def refresh(self) -> Dict[str, Any]:
        """Re-enumerate both vendors."""
        self.refresh_sato_devices()
        zebra = self.refresh_zebra_devices()
        return {'success': True, 'zebra': zebra, 'sato': self.channel.status.to_dict()}

    # =========================================================================
    # Printing
    # =========================================================================

    def print_label(self, intent: PrintIntent) -> Dict[str, Any]:
        """
        Encode and dispatch a print intent to its printer.

        Returns:
            Dict with success status and details
        """
        try:
            printer = self.registry.resolve(intent.printer_id)
        except DeviceNotFound as e:
            vendor = vendor_for_id(intent.printer_id)
            if vendor == 'sato':
                self.channel.report(StatusReport.error(e.message))
            elif vendor == 'zebra':
                self._set_zebra_status(StatusReport.error("Selected device not found."))
            return {'success': False, 'error': e.message, 'code': 'device_not_found'}

        encoder = get_encoder(VENDORS[printer.vendor]['encoder'])()
        logger.info(f"Printing {intent.kind.value} label x{intent.copies} on {printer.id}")

        if printer.vendor == 'sato':
            return self._print_sato(printer, intent, encoder)
        return self._print_zebra(printer, intent, encoder)

    def _print_sato(self, printer: DeviceDescriptor, intent: PrintIntent, encoder) -> Dict[str, Any]:
        job = build_send_raw_data(printer.handle, encoder.encode(intent))
        queued = self.channel.state != ConnectionState.OPEN
        self.channel.submit_job(job)
        return {
            'success': True,
            'printer_id': printer.id,
            'queued': queued,
            'status': self.channel.status.to_dict(),
        }

    def _print_zebra(self, printer: DeviceDescriptor, intent: PrintIntent, encoder) -> Dict[str, Any]:
        payload = encoder.encode(intent)
        copies = encoder.transport_copies(intent)
        self._set_zebra_status(StatusReport.pending("Sending print command..."))

        printed = 0
        last_error = None
        for copy in range(1, copies + 1):
            result = self.loader.send(printer.handle, payload)
            if result['success']:
                printed += 1
                self._set_zebra_status(StatusReport.success(f"Print succeeded! ({copy}/{copies})"))
            else:
                last_error = result['error']
                logger.warning(f"Zebra copy {copy}/{copies} failed: {last_error}")
                self._set_zebra_status(StatusReport.error(f"Print error: {last_error}"))

        if last_error is not None:
            self._set_zebra_status(StatusReport.error(
                f"Print error: {last_error} ({printed}/{copies} printed)"
            ))
        else:
            self._set_zebra_status(StatusReport.success(f"Print succeeded! ({printed}/{copies})"))

        result = {
            'success': last_error is None,
            'printer_id': printer.id,
            'copies': copies,
            'copies_printed': printed,
            'status': self._zebra_status.to_dict(),
        }
        if last_error is not None:
            result['error'] = last_error
        return result
