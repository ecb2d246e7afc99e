"""
Tests for the Browser Print HTTP binding.
"""

import json
from unittest.mock import Mock, patch

import pytest
import requests

from label_print_panel.browser_print import BrowserPrint
from label_print_panel.capability import inject_browser_print
from label_print_panel.exceptions import CapabilityLoadError

AVAILABLE = {
    'printer': [{
        'name': 'ZD421',
        'uid': 'ZB-001',
        'connection': 'usb',
        'deviceType': 'printer',
        'provider': 'com.zebra.ds.webdriver.desktop.provider.DefaultDeviceProvider',
        'manufacturer': 'Zebra Technologies',
    }]
}


def response(status_code=200, text=''):
    mock = Mock()
    mock.status_code = status_code
    mock.text = text
    return mock


@pytest.fixture
def sdk():
    return BrowserPrint('http://127.0.0.1:9100/')


@patch('label_print_panel.browser_print.requests.get')
def test_get_local_devices(mock_get, sdk):
    mock_get.return_value = response(text=json.dumps(AVAILABLE))
    found = []

    sdk.get_local_devices(found.extend, None, 'printer')

    mock_get.assert_called_once_with('http://127.0.0.1:9100/available', timeout=sdk.timeout)
    assert found[0].uid == 'ZB-001'
    assert found[0].name == 'ZD421'
    assert found[0].connection == 'usb'


@patch('label_print_panel.browser_print.requests.get')
def test_get_local_devices_connection_error(mock_get, sdk):
    mock_get.side_effect = requests.exceptions.ConnectionError()
    errors = []

    sdk.get_local_devices(lambda devices: None, errors.append)

    assert errors == ['Cannot connect to http://127.0.0.1:9100']


@patch('label_print_panel.browser_print.requests.get')
def test_get_default_device_none(mock_get, sdk):
    mock_get.return_value = response(text='')
    found = []

    sdk.get_default_device('printer', found.append)

    assert found == [None]


@patch('label_print_panel.browser_print.requests.post')
@patch('label_print_panel.browser_print.requests.get')
def test_device_send_writes_payload(mock_get, mock_post, sdk):
    mock_get.return_value = response(text=json.dumps(AVAILABLE))
    mock_post.return_value = response()
    devices = []
    sdk.get_local_devices(devices.extend)
    done = []

    devices[0].send('^XA^XZ', done.append, None)

    url = mock_post.call_args[0][0]
    body = json.loads(mock_post.call_args[1]['data'])
    assert url == 'http://127.0.0.1:9100/write'
    assert body['data'] == '^XA^XZ'
    assert body['device']['uid'] == 'ZB-001'
    assert done == ['']


@patch('label_print_panel.browser_print.requests.post')
def test_device_send_error(mock_post, sdk):
    from label_print_panel.browser_print import Device

    mock_post.return_value = response(status_code=500, text='Printer offline')
    errors = []

    Device(sdk, AVAILABLE['printer'][0]).send('^XA^XZ', None, errors.append)

    assert errors == ['Printer offline']


@patch('label_print_panel.browser_print.requests.get')
def test_ready(mock_get, sdk):
    mock_get.return_value = response(text='{}')
    assert sdk.ready()

    mock_get.side_effect = requests.exceptions.Timeout()
    assert not sdk.ready()


@patch('label_print_panel.capability.time.sleep')
@patch('label_print_panel.browser_print.requests.get')
def test_inject_gives_up_after_timeout(mock_get, mock_sleep):
    mock_get.side_effect = requests.exceptions.ConnectionError()

    with pytest.raises(CapabilityLoadError):
        inject_browser_print('http://127.0.0.1:9100', timeout=0)


@patch('label_print_panel.browser_print.requests.get')
def test_inject_returns_ready_sdk(mock_get):
    mock_get.return_value = response(text='{}')

    sdk = inject_browser_print('http://127.0.0.1:9100', timeout=1)

    assert isinstance(sdk, BrowserPrint)
    assert sdk.version == '3.1.250'
