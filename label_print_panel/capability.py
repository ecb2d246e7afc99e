"""
Vendor Capability Loader
========================

Lazily obtains the Zebra Browser Print capability and memoizes it.

The capability is the one piece of shared vendor state in the panel; this
loader is the only place that creates or reads it. The SDK's callback API
is turned into futures here, so callers only ever see result dicts or typed
exceptions.

Usage:
    loader = CapabilityLoader()
    loader.load()                   # CapabilityLoadError if the service is absent
    result = loader.enumerate_devices()
    if result['success']:
        for device in result['devices']:
            print(device.id, device.label)
"""

import threading
import time
from concurrent.futures import Future, TimeoutError as FutureTimeoutError
from typing import Any, Callable, Dict, List, Optional

from .browser_print import BrowserPrint
from .config import BROWSER_PRINT_URL, LOAD_TIMEOUT
from .exceptions import CapabilityAbsent, CapabilityLoadError, NotLoadedError
from .logging_config import get_logger
from .models import DeviceDescriptor

logger = get_logger(__name__)

ZEBRA_PREFIX = 'ZEBRA_'

# Seconds between readiness probes while injecting
PROBE_INTERVAL = 0.5


def inject_browser_print(base_url: str = BROWSER_PRINT_URL,
                         timeout: float = LOAD_TIMEOUT) -> BrowserPrint:
    """
    Create the Browser Print capability and wait for it to signal readiness.

    Raises:
        CapabilityLoadError: If the service never answers within ``timeout``
    """
    sdk = BrowserPrint(base_url)
    deadline = time.monotonic() + timeout
    logger.info(f"Loading Browser Print from {base_url}")

    while True:
        if sdk.ready():
            logger.info(f"Browser Print {sdk.version} loaded from {base_url}")
            return sdk
        if time.monotonic() >= deadline:
            raise CapabilityLoadError(base_url, 'service did not become ready')
        time.sleep(PROBE_INTERVAL)


def device_to_descriptor(device: Any) -> DeviceDescriptor:
    """Map one Browser Print device to a DeviceDescriptor."""
    return DeviceDescriptor(
        id=f'{ZEBRA_PREFIX}{device.uid}',
        label=f'ZEBRA: {device.name}',
        vendor='zebra',
        handle=device,
    )


class CapabilityLoader:
    """Load-once holder for the Browser Print capability."""

    def __init__(self, injector: Optional[Callable[[], Any]] = None,
                 capability: Any = None, timeout: float = LOAD_TIMEOUT):
        """
        Args:
            injector: Zero-argument callable returning a ready capability;
                defaults to inject_browser_print
            capability: An already-present capability, memoized without
                running the injector
            timeout: Seconds to wait for SDK callbacks
        """
        self._injector = injector or inject_browser_print
        self.timeout = timeout

        self._lock = threading.Lock()
        self._capability = capability
        self._loaded = capability is not None
        self._loading: Optional[Future] = None
        self._last_error: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self, timeout: Optional[float] = None) -> Any:
        """
        Return the capability, loading it on first use.

        Concurrent callers share one in-flight load. A failed load may be
        retried by calling load() again.

        Raises:
            CapabilityLoadError: If the capability cannot be obtained
        """
        with self._lock:
            if self._loaded:
                return self._capability
            future = self._loading
            owner = future is None
            if owner:
                future = self._loading = Future()

        if not owner:
            try:
                return future.result(timeout)
            except FutureTimeoutError:
                raise CapabilityLoadError('browser_print', 'timed out waiting for load')

        try:
            capability = self._injector()
            if capability is None:
                raise CapabilityLoadError('browser_print', 'injector returned no capability')
        except CapabilityAbsent as e:
            self._fail(future, e)
            raise
        except Exception as e:
            error = CapabilityLoadError('browser_print', str(e))
            self._fail(future, error)
            raise error from e

        with self._lock:
            self._capability = capability
            self._loaded = True
            self._loading = None
            self._last_error = None
        future.set_result(capability)
        return capability

    def _fail(self, future: Future, error: Exception):
        logger.error(f"Failed to load Browser Print: {error}")
        with self._lock:
            self._loading = None
            self._last_error = str(error)
        future.set_exception(error)

    def _require_loaded(self):
        if not self._loaded:
            raise NotLoadedError()
        return self._capability

    def _get_local_devices(self, capability, device_type: str) -> List[Any]:
        """Run the callback-style enumeration and wait for its outcome."""
        future = Future()

        def on_success(devices):
            if not future.done():
                future.set_result(list(devices or []))

        def on_error(message):
            if not future.done():
                future.set_exception(RuntimeError(str(message)))

        capability.get_local_devices(on_success, on_error, device_type)
        return future.result(self.timeout)

    def enumerate_devices(self, device_type: str = 'printer') -> Dict[str, Any]:
        """
        Enumerate local devices through the loaded capability.

        Returns:
            Dict with success, devices (DeviceDescriptors) and message

        Raises:
            NotLoadedError: If load() has not completed
        """
        capability = self._require_loaded()

        try:
            devices = self._get_local_devices(capability, device_type)
        except FutureTimeoutError:
            return {'success': False, 'devices': [], 'message': 'Device enumeration timed out'}
        except Exception as e:
            logger.warning(f"Failed to get local printers: {e}")
            return {'success': False, 'devices': [], 'message': f'Failed to get printers: {e}'}

        descriptors = [device_to_descriptor(d) for d in devices]
        return {
            'success': True,
            'devices': descriptors,
            'message': f'{len(descriptors)} printers found',
        }

    def send(self, device: Any, data: str) -> Dict[str, Any]:
        """
        Send raw data to one SDK device and wait for its callback.

        Returns:
            Dict with success status and, on failure, error
        """
        self._require_loaded()
        future = Future()

        def on_success(*_):
            if not future.done():
                future.set_result(True)

        def on_error(message):
            if not future.done():
                future.set_exception(RuntimeError(str(message)))

        try:
            device.send(data, on_success, on_error)
            future.result(self.timeout)
        except FutureTimeoutError:
            return {'success': False, 'error': 'Send timed out'}
        except Exception as e:
            return {'success': False, 'error': str(e)}
        return {'success': True, 'bytes_sent': len(data)}

    def test_connection(self) -> Dict[str, Any]:
        """
        Check that the capability answers, printer or not.

        Raises:
            NotLoadedError: If load() has not completed
        """
        capability = self._require_loaded()

        try:
            devices = self._get_local_devices(capability, 'printer')
        except Exception as e:
            return {
                'success': False,
                'message': f'Connection test failed: {e}',
                'device_count': 0,
                'devices': [],
            }

        return {
            'success': True,
            'message': 'Connection test successful',
            'device_count': len(devices),
            'devices': [device_to_descriptor(d) for d in devices],
        }

    def _available_methods(self) -> List[str]:
        capability = self._capability
        if capability is None:
            return []
        return sorted(
            name for name in dir(capability)
            if not name.startswith('_') and callable(getattr(capability, name, None))
        )

    def status(self) -> Dict[str, Any]:
        """Load status plus capability metadata."""
        with self._lock:
            loaded = self._loaded
            loading = self._loading is not None and not loaded
            last_error = self._last_error

        version = None
        if loaded:
            version = getattr(self._capability, 'version', None) or 'Unknown'

        return {
            'loaded': loaded,
            'loading': loading,
            'last_error': last_error,
            'version': version,
            'available_methods': self._available_methods() if loaded else [],
        }

    def cleanup(self):
        """Forget the memoized capability."""
        with self._lock:
            self._capability = None
            self._loaded = False
            self._loading = None
