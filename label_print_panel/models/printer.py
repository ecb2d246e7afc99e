"""
Printer Model
=============

Normalized record for one printable device, regardless of vendor.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class DeviceDescriptor:
    """One entry of the merged printer list."""

    # Vendor-prefixed, unique across vendors: SATO_<PortName>, ZEBRA_<uid>
    id: str
    label: str
    vendor: str  # sato, zebra

    # What the transport needs to address the device:
    # the driver name for SATO, the SDK device object for Zebra
    handle: Any = field(default=None, compare=False, repr=False)

    port_name: Optional[str] = None
    online: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            'id': self.id,
            'label': self.label,
            'vendor': self.vendor,
        }
        if self.port_name is not None:
            data['port_name'] = self.port_name
        if self.online is not None:
            data['online'] = self.online
        if isinstance(self.handle, str):
            data['driver_name'] = self.handle
        return data
