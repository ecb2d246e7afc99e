"""
Label Print Panel Models
"""

from .printer import DeviceDescriptor
from .job import PrintIntent, LabelKind
from .status import ConnectionState, StatusKind, StatusReport

__all__ = [
    'DeviceDescriptor', 'PrintIntent', 'LabelKind',
    'ConnectionState', 'StatusKind', 'StatusReport',
]
