"""
Base Encoder
============

Abstract base class for label command encoders.
"""

from abc import ABC, abstractmethod
from typing import Union

from ..models import PrintIntent, LabelKind


class BaseEncoder(ABC):
    """Maps a PrintIntent to a vendor command payload. Stateless."""

    # Vendor key from config.VENDORS
    vendor = ''

    @abstractmethod
    def build_text_barcode(self, intent: PrintIntent) -> Union[bytes, str]:
        """
        Build the text + 1-D barcode label.

        Args:
            intent: Print intent carrying text, barcode and copy count

        Returns:
            Raw printer-language command
        """
        pass

    @abstractmethod
    def build_qr(self, intent: PrintIntent) -> Union[bytes, str]:
        """
        Build the QR code label.

        Args:
            intent: Print intent carrying qr_data and copy count

        Returns:
            Raw printer-language command
        """
        pass

    def build(self, intent: PrintIntent) -> Union[bytes, str]:
        """Build the raw command for the intent's label kind."""
        if intent.kind == LabelKind.QR:
            return self.build_qr(intent)
        return self.build_text_barcode(intent)

    def encode(self, intent: PrintIntent) -> str:
        """Transport payload for the intent (override to wrap the raw command)."""
        command = self.build(intent)
        if isinstance(command, bytes):
            return command.decode('utf-8')
        return command

    def transport_copies(self, intent: PrintIntent) -> int:
        """How many times the transport must send the payload."""
        return 1
