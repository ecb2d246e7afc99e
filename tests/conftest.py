"""
Shared fixtures: a scriptable spooler transport and a fake Browser Print SDK.
"""

import pytest

from label_print_panel.capability import CapabilityLoader
from label_print_panel.channel import ChannelManager
from label_print_panel.registry import PrinterRegistry
from label_print_panel.service import PrintPanel


class FakeTransport:
    """Stands in for WebSocketTransport; tests fire the events by hand."""

    def __init__(self, url, on_open, on_message, on_close, on_error):
        self.url = url
        self.handlers = {
            'open': on_open,
            'message': on_message,
            'close': on_close,
            'error': on_error,
        }
        self.sent = []
        self.connected = False
        self.closed = False
        self.fail_send = False

    def connect(self):
        self.connected = True

    def send(self, text):
        if self.fail_send:
            raise ConnectionError("socket is already closed")
        self.sent.append(text)

    def close(self):
        self.closed = True

    # event helpers
    def open(self):
        self.handlers['open'](self)

    def message(self, raw):
        self.handlers['message'](self, raw)

    def drop(self, was_clean=False):
        self.handlers['close'](self, was_clean)

    def error(self, err="connection refused"):
        self.handlers['error'](self, err)


class TransportFactory:
    """Records every transport the channel creates."""

    def __init__(self):
        self.created = []

    def __call__(self, *args):
        transport = FakeTransport(*args)
        self.created.append(transport)
        return transport

    @property
    def last(self):
        return self.created[-1]


class FakeDevice:
    """Browser Print device with scriptable send outcomes."""

    def __init__(self, uid, name, outcomes=None):
        self.uid = uid
        self.name = name
        self.sent = []
        self._outcomes = list(outcomes or [])

    def send(self, data, success=None, error=None):
        self.sent.append(data)
        outcome = self._outcomes.pop(0) if self._outcomes else None
        if outcome is None:
            success('')
        else:
            error(outcome)


class FakeSDK:
    """Callback-style stand-in for the BrowserPrint object."""

    version = '3.1.250'

    def __init__(self, devices=None, enumeration_error=None):
        self.devices = devices or []
        self.enumeration_error = enumeration_error
        self.calls = []

    def get_local_devices(self, success, error=None, device_type='printer'):
        self.calls.append(device_type)
        if self.enumeration_error:
            error(self.enumeration_error)
        else:
            success(self.devices)


@pytest.fixture
def transports():
    return TransportFactory()


@pytest.fixture
def channel(transports):
    return ChannelManager(url='ws://test/SATOPrinterAPI', transport_factory=transports)


@pytest.fixture
def zebra_device():
    return FakeDevice('ZB-001', 'ZD421')


@pytest.fixture
def sdk(zebra_device):
    return FakeSDK(devices=[zebra_device])


@pytest.fixture
def loader(sdk):
    return CapabilityLoader(capability=sdk, timeout=1)


@pytest.fixture
def panel(channel, loader):
    return PrintPanel(channel=channel, loader=loader, registry=PrinterRegistry())
