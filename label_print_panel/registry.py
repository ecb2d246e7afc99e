"""
Printer Registry
================

Merged, addressable list of SATO and Zebra printers with a stable
selection. Each vendor's list is replaced wholesale on every enumeration.
"""

import threading
from typing import Dict, Iterable, List, Optional, Sequence

from .exceptions import DeviceNotFound
from .models import DeviceDescriptor


class PrinterRegistry:
    """Merges per-vendor device lists and tracks the selected printer."""

    def __init__(self, vendor_order: Sequence[str] = ('sato', 'zebra')):
        self._lock = threading.Lock()
        self._vendor_order = tuple(vendor_order)
        self._by_vendor: Dict[str, List[DeviceDescriptor]] = {v: [] for v in self._vendor_order}
        self._printers: List[DeviceDescriptor] = []
        self._selected_id: Optional[str] = None

    @property
    def printers(self) -> List[DeviceDescriptor]:
        return list(self._printers)

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected(self) -> Optional[DeviceDescriptor]:
        with self._lock:
            return self._find(self._selected_id)

    def update(self, vendor: str, descriptors: Iterable[DeviceDescriptor]):
        """Replace one vendor's devices and re-merge."""
        with self._lock:
            if vendor not in self._by_vendor:
                self._vendor_order += (vendor,)
            self._by_vendor[vendor] = list(descriptors)
            self._merge()

    def _merge(self):
        merged = []
        for vendor in self._vendor_order:
            merged.extend(self._by_vendor.get(vendor, []))
        self._printers = merged

        if self._find(self._selected_id) is None:
            self._selected_id = merged[0].id if merged else None

    def _find(self, printer_id: Optional[str]) -> Optional[DeviceDescriptor]:
        if printer_id is None:
            return None
        for printer in self._printers:
            if printer.id == printer_id:
                return printer
        return None

    def select(self, printer_id: str) -> DeviceDescriptor:
        """Select a printer by id. Raises DeviceNotFound for unknown ids."""
        with self._lock:
            printer = self._find(printer_id)
            if printer is None:
                raise DeviceNotFound(printer_id)
            self._selected_id = printer_id
            return printer

    def resolve(self, printer_id: Optional[str] = None) -> DeviceDescriptor:
        """
        Look up a printer, defaulting to the current selection.

        Raises:
            DeviceNotFound: If the id does not resolve
        """
        with self._lock:
            if printer_id is None:
                printer_id = self._selected_id
            printer = self._find(printer_id)
        if printer is None:
            raise DeviceNotFound(printer_id)
        return printer
