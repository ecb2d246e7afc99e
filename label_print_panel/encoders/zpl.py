"""
ZPL Encoder
===========

Encoder for Zebra printers using ZPL (Zebra Programming Language).
The label carries no ^PQ quantity: Browser Print sends it once per copy.
"""

from .base import BaseEncoder
from ..models import PrintIntent


class ZPLEncoder(BaseEncoder):
    """Encoder for ZPL-compatible Zebra printers."""

    vendor = 'zebra'

    # ZPL barcode field commands by symbology
    BARCODE_COMMANDS = {
        'C128': '^BCN,100,Y,N,N',
        'C39': '^B3N,N,100,Y,N',
    }

    def build_text_barcode(self, intent: PrintIntent) -> str:
        zpl = '^XA'
        zpl += f'^FO50,50^A0N,28,28^FD{intent.text}^FS'
        zpl += f'^FO50,100^BY2{self.BARCODE_COMMANDS[intent.symbology]}^FD{intent.barcode}^FS'
        zpl += '^XZ'
        return zpl

    def build_qr(self, intent: PrintIntent) -> str:
        return f'^XA^FO50,50^BQN,2,4^FDQA,{intent.qr_data}^FS^XZ'

    def transport_copies(self, intent: PrintIntent) -> int:
        return intent.copies
