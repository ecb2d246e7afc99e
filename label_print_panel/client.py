"""
Label Print Panel Client
========================

Python SDK for the panel's HTTP API.

Usage:
    from label_print_panel.client import PanelClient

    client = PanelClient('http://localhost:5100', api_key='your-key')

    printers = client.list_printers()
    client.select_printer(printers[0]['id'])
    result = client.print_qr('https://example.com', copies=2)
"""

import requests
from typing import Dict, Any, Optional, List


class PanelClient:
    """Client for the Label Print Panel API."""

    def __init__(self, base_url: str = 'http://localhost:5100', api_key: str = None):
        """
        Initialize client.

        Args:
            base_url: Base URL of the panel
            api_key: API key for print requests
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key

    def _headers(self) -> Dict[str, str]:
        """Get request headers."""
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def _request(self, method: str, endpoint: str, data: Dict = None) -> Dict[str, Any]:
        """Make API request."""
        url = f'{self.base_url}{endpoint}'

        try:
            if method == 'GET':
                response = requests.get(url, headers=self._headers(), timeout=30)
            elif method == 'POST':
                response = requests.post(url, json=data or {}, headers=self._headers(), timeout=60)
            elif method == 'PUT':
                response = requests.put(url, json=data or {}, headers=self._headers(), timeout=30)
            else:
                raise ValueError(f'Unknown method: {method}')

            return response.json()

        except requests.exceptions.Timeout:
            return {'success': False, 'error': 'Request timeout'}
        except requests.exceptions.ConnectionError:
            return {'success': False, 'error': f'Cannot connect to {self.base_url}'}
        except ValueError as e:
            return {'success': False, 'error': str(e)}

    # =========================================================================
    # Health
    # =========================================================================

    def health(self) -> Dict[str, Any]:
        """Check service health."""
        return self._request('GET', '/health')

    def is_online(self) -> bool:
        """Check if the panel is online."""
        return self.health().get('status') == 'online'

    # =========================================================================
    # Printers
    # =========================================================================

    def list_printers(self) -> List[Dict[str, Any]]:
        """List the merged printer list."""
        return self._request('GET', '/api/printer/list').get('printers', [])

    def selected_printer(self) -> Optional[str]:
        """Id of the currently selected printer."""
        return self._request('GET', '/api/printer/list').get('selected')

    def refresh(self) -> Dict[str, Any]:
        """Re-enumerate SATO and Zebra printers."""
        return self._request('POST', '/api/printer/refresh')

    def select_printer(self, printer_id: str) -> Dict[str, Any]:
        """Select the default printer."""
        return self._request('PUT', '/api/printer/selection', {'printer_id': printer_id})

    # =========================================================================
    # Printing
    # =========================================================================

    def print_label(self, kind: str = 'text_barcode', printer_id: str = None,
                    copies: int = 1, **fields) -> Dict[str, Any]:
        """
        Print a test label.

        Args:
            kind: 'text_barcode' or 'qr'
            printer_id: Target printer; the panel's selection when omitted
            copies: Number of copies
            **fields: text, barcode, symbology, qr_data
        """
        data = {'kind': kind, 'copies': copies, **fields}
        if printer_id:
            data['printer_id'] = printer_id
        return self._request('POST', '/api/printer/print', data)

    def print_text_barcode(self, text: str, barcode: str, **kwargs) -> Dict[str, Any]:
        """Print the text + barcode label."""
        return self.print_label('text_barcode', text=text, barcode=barcode, **kwargs)

    def print_qr(self, qr_data: str, **kwargs) -> Dict[str, Any]:
        """Print the QR code label."""
        return self.print_label('qr', qr_data=qr_data, **kwargs)

    # =========================================================================
    # Status
    # =========================================================================

    def get_status(self) -> Dict[str, Any]:
        """Per-vendor status lines."""
        return self._request('GET', '/api/status')
