"""
Print Intent Model
==================

One user print action. Built per request, never stored.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


class LabelKind(str, Enum):
    """The two fixed label formats."""

    TEXT_BARCODE = "text_barcode"
    QR = "qr"


DEFAULT_TEXT = "1234567890"
DEFAULT_BARCODE = "1234567890"
DEFAULT_QR_DATA = "https://www.google.com"

SYMBOLOGIES = ('C128', 'C39')


def _text_field(data: Dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


@dataclass(frozen=True)
class PrintIntent:
    """Print request for a single printer."""

    printer_id: Optional[str] = None
    kind: LabelKind = LabelKind.TEXT_BARCODE

    text: str = DEFAULT_TEXT
    barcode: str = DEFAULT_BARCODE
    symbology: str = 'C128'
    qr_data: str = DEFAULT_QR_DATA

    copies: int = 1

    def __post_init__(self):
        if not isinstance(self.copies, int) or isinstance(self.copies, bool) or self.copies < 1:
            raise ValueError(f"copies must be an integer >= 1, got {self.copies!r}")
        if self.symbology not in SYMBOLOGIES:
            raise ValueError(f"Unsupported symbology {self.symbology!r}. Valid: {list(SYMBOLOGIES)}")
        if self.kind == LabelKind.QR and not self.qr_data:
            raise ValueError("qr_data required for a QR label")
        if self.kind == LabelKind.TEXT_BARCODE and not self.barcode:
            raise ValueError("barcode required for a text/barcode label")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PrintIntent':
        """Create from a request body. Raises ValueError on bad input."""
        kind = data.get('kind', LabelKind.TEXT_BARCODE.value)
        try:
            kind = LabelKind(kind)
        except ValueError:
            raise ValueError(f"Invalid label kind. Valid: {[k.value for k in LabelKind]}")

        try:
            copies = int(data.get('copies', 1))
        except (TypeError, ValueError):
            raise ValueError("copies must be an integer >= 1")

        printer_id = data.get('printer_id') or data.get('printerName')
        if printer_id is not None and not isinstance(printer_id, str):
            raise ValueError("printer_id must be a string")

        return cls(
            printer_id=printer_id,
            kind=kind,
            text=_text_field(data, 'text', DEFAULT_TEXT),
            barcode=_text_field(data, 'barcode', DEFAULT_BARCODE),
            symbology=_text_field(data, 'symbology', 'C128').upper(),
            qr_data=_text_field(data, 'qr_data', DEFAULT_QR_DATA),
            copies=copies,
        )
