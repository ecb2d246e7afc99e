"""
Label Print Panel - HTTP API
============================

JSON API over the print panel: printer list, selection, status lines and
test-label printing.

Run: python -m label_print_panel
"""

import sys
from datetime import datetime

from flask import Flask, request, jsonify
from flask_cors import CORS

from . import __version__
from .config import API_KEY
from .exceptions import DeviceNotFound
from .logging_config import get_logger
from .models import PrintIntent
from .service import PrintPanel

logger = get_logger(__name__)


def _check_api_key():
    """Validate API key from request."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    auth_header = request.headers.get('Authorization', '')

    # Check body
    if data.get('api_key') == API_KEY:
        return True

    # Check header (Bearer token)
    if auth_header.startswith('Bearer ') and auth_header[7:] == API_KEY:
        return True

    return False


def create_app(panel: PrintPanel = None) -> Flask:
    """
    Build the Flask app around a print panel.

    Args:
        panel: Panel to expose; a default one is created when omitted.
            The caller owns its start()/stop() lifecycle.
    """
    app = Flask(__name__)
    CORS(app)

    panel = panel or PrintPanel()
    app.config['PANEL'] = panel

    # =========================================================================
    # Health & Info Endpoints
    # =========================================================================

    @app.route('/health', methods=['GET'])
    def health():
        """Health check with system info."""
        import platform

        return jsonify({
            'status': 'online',
            'version': __version__,
            'platform': platform.system(),
            'python': sys.version.split()[0],
            'printers_found': len(panel.registry.printers),
            'timestamp': datetime.now().isoformat(),
        })

    @app.route('/api', methods=['GET'])
    def api_info():
        """API info (JSON)."""
        return jsonify({
            'service': 'Label Print Panel',
            'version': __version__,
            'status': 'running',
            'endpoints': {
                'health': '/health',
                'printers': '/api/printer/list',
                'refresh': '/api/printer/refresh',
                'selection': '/api/printer/selection',
                'print': '/api/printer/print',
                'status': '/api/status',
                'browser_print_test': '/api/browser-print/test',
                'browser_print_reset': '/api/browser-print/reset',
            }
        })

    # =========================================================================
    # Printer List & Selection
    # =========================================================================

    @app.route('/api/printer/list', methods=['GET'])
    def list_printers():
        """List the merged SATO + Zebra printers."""
        printers = panel.registry.printers
        return jsonify({
            'success': True,
            'printers': [p.to_dict() for p in printers],
            'selected': panel.registry.selected_id,
            'count': len(printers),
        })

    @app.route('/api/printer/refresh', methods=['POST'])
    def refresh_printers():
        """Re-enumerate both vendors."""
        result = panel.refresh()
        result['count'] = len(panel.registry.printers)
        return jsonify(result)

    @app.route('/api/printer/selection', methods=['PUT'])
    def select_printer():
        """Select the printer used when a print request names none."""
        data = request.get_json(silent=True)
        printer_id = data.get('printer_id') if isinstance(data, dict) else None
        if not printer_id or not isinstance(printer_id, str):
            return jsonify({'success': False, 'error': 'printer_id required'}), 400

        try:
            printer = panel.registry.select(printer_id)
        except DeviceNotFound as e:
            return jsonify({'success': False, 'error': e.message}), 404

        return jsonify({'success': True, 'printer': printer.to_dict()})

    # =========================================================================
    # Status
    # =========================================================================

    @app.route('/api/status', methods=['GET'])
    def status():
        """Per-vendor status lines plus connection details."""
        return jsonify({
            'success': True,
            'sato': panel.channel.status.to_dict(),
            'zebra': panel.zebra_status.to_dict(),
            'connection': panel.channel.state.value,
            'browser_print': panel.loader.status(),
        })

    @app.route('/api/browser-print/test', methods=['GET'])
    def test_browser_print():
        """Check that Browser Print answers and count its printers."""
        result = panel.test_zebra_connection()
        result['devices'] = [d.to_dict() for d in result['devices']]
        return jsonify(result)

    @app.route('/api/browser-print/reset', methods=['POST'])
    def reset_browser_print():
        """Drop the loaded Browser Print SDK; the next refresh reloads it."""
        panel.reset_browser_print()
        return jsonify({'success': True, 'browser_print': panel.loader.status()})

    # =========================================================================
    # Printing
    # =========================================================================

    @app.route('/api/printer/print', methods=['POST'])
    def print_label():
        """Print a text/barcode or QR test label."""
        if not _check_api_key():
            return jsonify({'success': False, 'error': 'Invalid API key'}), 401

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'success': False, 'error': 'Request body required'}), 400

        try:
            intent = PrintIntent.from_dict(data)
        except ValueError as e:
            return jsonify({'success': False, 'error': str(e)}), 400

        result = panel.print_label(intent)
        if result.get('code') == 'device_not_found':
            return jsonify(result), 404
        return jsonify(result)

    return app
