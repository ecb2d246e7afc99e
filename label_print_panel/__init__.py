"""
Label Print Panel
=================

Local control panel for label printers from two vendor ecosystems.

Supports:
- SATO label printers (SBPL via the SATO All-In-One Tool WebSocket spooler)
- Zebra label printers (ZPL via the Zebra Browser Print service)

Usage:
    python -m label_print_panel

API Endpoints:
    GET  /api/printer/list       - Merged SATO + Zebra printer list
    POST /api/printer/refresh    - Re-enumerate both vendors
    PUT  /api/printer/selection  - Select a printer
    POST /api/printer/print      - Print a text/barcode or QR test label
    GET  /api/status             - Per-vendor status lines
"""

__version__ = '1.0.0'
__author__ = 'EGS Software AG'
