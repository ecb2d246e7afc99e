"""
Zebra Browser Print Binding
===========================

Python rendering of the Zebra Browser Print SDK object. Like the vendor's
JavaScript SDK it is callback based and talks to the Browser Print desktop
service over its local HTTP API:

    GET  /default?type=printer   default device (readiness probe)
    GET  /available              {"printer": [device, ...]}
    POST /write                  {"device": device, "data": "^XA...^XZ"}

Only ``capability.CapabilityLoader`` should construct or hold this object.

Usage:
    sdk = BrowserPrint('http://127.0.0.1:9100')
    sdk.get_local_devices(on_devices, on_error, 'printer')
"""

import json
from typing import Any, Callable, Dict, List, Optional

import requests

from .config import DEFAULT_TIMEOUT
from .logging_config import get_logger

logger = get_logger(__name__)

SDK_VERSION = '3.1.250'


class Device:
    """One device known to Browser Print."""

    def __init__(self, sdk: 'BrowserPrint', info: Dict[str, Any]):
        self._sdk = sdk
        self.info = dict(info)
        self.name = info.get('name', '')
        self.uid = info.get('uid', '')
        self.connection = info.get('connection', '')
        self.device_type = info.get('deviceType', 'printer')
        self.provider = info.get('provider', '')
        self.manufacturer = info.get('manufacturer', '')
        self.version = info.get('version')

    def __repr__(self):
        return f'<Device {self.name!r} uid={self.uid!r}>'

    def send(self, data: str, success: Optional[Callable] = None,
             error: Optional[Callable] = None):
        """
        Write raw printer data to the device.

        Args:
            data: Printer command (ZPL)
            success: success(response_text)
            error: error(message)
        """
        result = self._sdk._request('POST', '/write', {'device': self.info, 'data': data})
        if result['success']:
            if success:
                success(result.get('text', ''))
        elif error:
            error(result['error'])


class BrowserPrint:
    """Client for the Browser Print desktop service."""

    version = SDK_VERSION

    def __init__(self, base_url: str = 'http://127.0.0.1:9100',
                 timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize client.

        Args:
            base_url: Base URL of the Browser Print service
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _request(self, method: str, endpoint: str, data: Dict = None) -> Dict[str, Any]:
        """Make a service request. Never raises."""
        url = f'{self.base_url}{endpoint}'
        headers = {'Content-Type': 'text/plain;charset=UTF-8'}

        try:
            if method == 'GET':
                response = requests.get(url, timeout=self.timeout)
            elif method == 'POST':
                response = requests.post(url, data=json.dumps(data), headers=headers,
                                         timeout=self.timeout)
            else:
                raise ValueError(f'Unknown method: {method}')

            if response.status_code != 200:
                return {'success': False, 'error': response.text or f'HTTP {response.status_code}'}

            return {'success': True, 'text': response.text}

        except requests.exceptions.Timeout:
            return {'success': False, 'error': 'Request timeout'}
        except requests.exceptions.ConnectionError:
            return {'success': False, 'error': f'Cannot connect to {self.base_url}'}
        except Exception as e:
            return {'success': False, 'error': str(e)}

    def ready(self) -> bool:
        """Readiness probe: True once the service answers."""
        result = self._request('GET', '/default?type=printer')
        if not result['success']:
            logger.debug(f"Browser Print not ready: {result['error']}")
        return result['success']

    def get_local_devices(self, success: Callable[[List[Device]], Any],
                          error: Optional[Callable[[str], Any]] = None,
                          device_type: str = 'printer'):
        """
        Enumerate devices attached to this machine.

        Args:
            success: success(list_of_devices)
            error: error(message)
            device_type: Only report devices of this type
        """
        result = self._request('GET', '/available')
        if not result['success']:
            if error:
                error(result['error'])
            return

        try:
            payload = json.loads(result['text']) if result['text'] else {}
        except ValueError:
            if error:
                error('Invalid response from Browser Print')
            return

        entries = payload.get(device_type, []) if isinstance(payload, dict) else []
        if isinstance(entries, dict):
            entries = [entries]
        success([Device(self, entry) for entry in entries if isinstance(entry, dict)])

    def get_default_device(self, device_type: str, success: Callable,
                           error: Optional[Callable[[str], Any]] = None):
        """Report the service's default device, or None when there is none."""
        result = self._request('GET', f'/default?type={device_type}')
        if not result['success']:
            if error:
                error(result['error'])
            return

        try:
            info = json.loads(result['text']) if result['text'].strip() else None
        except ValueError:
            info = None
        success(Device(self, info) if isinstance(info, dict) else None)
