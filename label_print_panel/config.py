"""
Label Print Panel Configuration
"""

import os

# =============================================================================
# Server Configuration
# =============================================================================

PORT = int(os.environ.get('LABEL_PANEL_PORT', 5100))
HOST = os.environ.get('LABEL_PANEL_HOST', '127.0.0.1')
DEBUG = os.environ.get('LABEL_PANEL_DEBUG', 'false').lower() == 'true'

# API Key for authentication
API_KEY = os.environ.get('LABEL_PANEL_API_KEY', 'label-panel-2026')

LOG_LEVEL = os.environ.get('LABEL_PANEL_LOG_LEVEL', 'INFO').upper()
LOG_DIR = os.environ.get('LABEL_PANEL_LOG_DIR')

# =============================================================================
# Vendor Endpoints
# =============================================================================

# SATO All-In-One Tool spooler
SATO_WEBSOCKET_URL = os.environ.get('LABEL_PANEL_SATO_URL', 'ws://localhost:8055/SATOPrinterAPI')

# Zebra Browser Print desktop service
BROWSER_PRINT_URL = os.environ.get('LABEL_PANEL_BROWSER_PRINT_URL', 'http://127.0.0.1:9100')

DEFAULT_TIMEOUT = 30  # seconds
LOAD_TIMEOUT = int(os.environ.get('LABEL_PANEL_LOAD_TIMEOUT', 10))

# =============================================================================
# Supported Vendors
# =============================================================================

VENDORS = {
    'sato': {
        'name': 'SATO Label Printer',
        'encoder': 'sbpl',
        'transport': 'spooler',
        'prefix': 'SATO_',
    },
    'zebra': {
        'name': 'Zebra Label Printer',
        'encoder': 'zpl',
        'transport': 'browser_print',
        'prefix': 'ZEBRA_',
    },
}


def vendor_for_id(printer_id: str):
    """Return the vendor key owning a prefixed printer id, or None."""
    for vendor, info in VENDORS.items():
        if printer_id and printer_id.startswith(info['prefix']):
            return vendor
    return None
