"""
SBPL Encoder
============

Encoder for SATO printers using SBPL (SATO Barcode Printer Language).
The spooler's Driver.SendRawData call takes the command base64-encoded.
"""

import base64

from .base import BaseEncoder
from ..models import PrintIntent


class SBPLEncoder(BaseEncoder):
    """Encoder for SATO printers using SBPL."""

    vendor = 'sato'

    ESC = '\x1b'

    # SBPL barcode commands: symbology -> (command, narrow bar width)
    BARCODE_COMMANDS = {
        'C128': ('BG', 2),  # Code 128
        'C39': ('B1', 2),   # Code 39, needs * start/stop
    }

    def _cmd(self, *parts: str) -> str:
        return ''.join(self.ESC + part for part in parts)

    def _build_sbpl_label(self, commands: list, copies: int) -> bytes:
        """
        Build SBPL label command sequence.

        Args:
            commands: List of SBPL field commands (already ESC-prefixed)
            copies: Print quantity

        Returns:
            Complete SBPL command bytes
        """
        data = self._cmd('A')             # Start of label format
        data += self._cmd('A3H001V001')   # Base reference point
        data += ''.join(commands)
        data += self._cmd(f'Q{copies}')   # Print quantity
        data += self._cmd('Z')            # End of label format
        return data.encode('utf-8')

    def _text_field(self, text: str) -> str:
        return self._cmd('%0', 'H0500', 'V0050', 'L0101', 'P01', f'XM{text}')

    def build_text_barcode(self, intent: PrintIntent) -> bytes:
        command, narrow = self.BARCODE_COMMANDS[intent.symbology]
        data = intent.barcode
        if intent.symbology == 'C39':
            data = f'*{data}*'

        commands = [
            self._text_field(intent.text),
            self._cmd('%0', 'H0500', 'V0120', f'{command}{narrow:02d}050{data}'),
        ]
        return self._build_sbpl_label(commands, intent.copies)

    def build_qr(self, intent: PrintIntent) -> bytes:
        commands = [
            self._text_field(intent.text),
            self._cmd('H0500', 'V0120', f'BQ2,M2,L,{intent.qr_data}'),
        ]
        return self._build_sbpl_label(commands, intent.copies)

    def encode(self, intent: PrintIntent) -> str:
        """Base64 of the SBPL bytes, as Driver.SendRawData expects."""
        return base64.b64encode(self.build(intent)).decode('ascii')
