"""
Tests for the print panel service: lifecycle, discovery and dispatch.
"""

import base64
import json

from label_print_panel.capability import CapabilityLoader
from label_print_panel.exceptions import CapabilityLoadError
from label_print_panel.models import ConnectionState, LabelKind, PrintIntent, StatusKind
from label_print_panel.registry import PrinterRegistry
from label_print_panel.service import PrintPanel

from .conftest import FakeDevice, FakeSDK

DRIVERS = '[{"DriverName": "SATO CL4NX 203dpi", "PortName": "USB001", "Online": true}]'


def start_with_sato(panel, transports):
    panel.start()
    transports.last.open()
    transports.last.message(DRIVERS)
    return transports.last


class TestLifecycle:

    def test_start_connects_and_enumerates(self, panel, transports):
        transport = start_with_sato(panel, transports)

        assert [p.id for p in panel.registry.printers] == ['SATO_USB001', 'ZEBRA_ZB-001']
        # Zebra enumerates synchronously during start(), so it arrives first
        assert panel.registry.selected_id == 'ZEBRA_ZB-001'
        assert panel.zebra_status.kind == StatusKind.SUCCESS
        assert json.loads(transport.sent[0]) == {'Method': 'Driver.GetDriverList'}

    def test_context_manager_tears_down(self, channel, loader, transports):
        with PrintPanel(channel=channel, loader=loader) as panel:
            transports.last.open()
            assert panel.channel.state == ConnectionState.OPEN

        assert transports.last.closed

    def test_missing_browser_print(self, channel, transports):
        def injector():
            raise CapabilityLoadError('http://127.0.0.1:9100')

        panel = PrintPanel(channel=channel, loader=CapabilityLoader(injector=injector))
        result = panel.refresh_zebra_devices()

        assert not result['success']
        assert panel.zebra_status.kind == StatusKind.ERROR
        assert 'not found' in panel.zebra_status.message

    def test_zebra_enumeration_failure(self, channel):
        loader = CapabilityLoader(capability=FakeSDK(enumeration_error='boom'))
        panel = PrintPanel(channel=channel, loader=loader)

        result = panel.refresh_zebra_devices()

        assert not result['success']
        assert panel.zebra_status.kind == StatusKind.ERROR

    def test_zebra_connection_check(self, panel):
        result = panel.test_zebra_connection()

        assert result['success']
        assert [d.id for d in result['devices']] == ['ZEBRA_ZB-001']

    def test_zebra_connection_check_without_browser_print(self, channel):
        def injector():
            raise CapabilityLoadError('http://127.0.0.1:9100')

        panel = PrintPanel(channel=channel, loader=CapabilityLoader(injector=injector))
        result = panel.test_zebra_connection()

        assert not result['success']
        assert result['device_count'] == 0

    def test_reset_browser_print(self, panel):
        panel.refresh_zebra_devices()

        panel.reset_browser_print()

        assert not panel.loader.is_loaded
        assert panel.zebra_status.kind == StatusKind.PENDING

    def test_statuses(self, panel, transports):
        start_with_sato(panel, transports)
        statuses = panel.statuses()

        assert statuses['sato'].kind == StatusKind.SUCCESS
        assert statuses['zebra'].message == '1 printers found'


class TestSatoPrinting:

    def test_prints_through_spooler(self, panel, transports):
        transport = start_with_sato(panel, transports)

        result = panel.print_label(PrintIntent(printer_id='SATO_USB001', text='HELLO', copies=2))

        assert result['success']
        assert result['queued'] is False
        job = json.loads(transport.sent[-1])
        assert job['Method'] == 'Driver.SendRawData'
        assert job['Parameters']['DriverName'] == 'SATO CL4NX 203dpi'
        command = base64.b64decode(job['Parameters']['Data']).decode('utf-8')
        assert 'XMHELLO' in command
        assert command.endswith('\x1bQ2\x1bZ')

    def test_queues_while_disconnected(self, panel, transports):
        transport = start_with_sato(panel, transports)
        transport.drop(was_clean=False)

        result = panel.print_label(PrintIntent(printer_id='SATO_USB001'))

        assert result['queued'] is True
        assert len(transports.created) == 2
        transports.last.open()
        assert json.loads(transports.last.sent[0])['Method'] == 'Driver.SendRawData'

    def test_uses_selection_when_no_printer_given(self, panel, transports):
        transport = start_with_sato(panel, transports)
        panel.registry.select('SATO_USB001')

        result = panel.print_label(PrintIntent(kind=LabelKind.QR, qr_data='abc'))

        assert result['printer_id'] == 'SATO_USB001'
        assert json.loads(transport.sent[-1])['Method'] == 'Driver.SendRawData'

    def test_first_arrival_stays_selected(self, panel, transports, zebra_device):
        transport = start_with_sato(panel, transports)

        result = panel.print_label(PrintIntent(kind=LabelKind.QR, qr_data='abc'))

        assert result['printer_id'] == 'ZEBRA_ZB-001'
        assert len(zebra_device.sent) == 1
        assert [json.loads(f)['Method'] for f in transport.sent] == ['Driver.GetDriverList']

    def test_unknown_sato_printer(self, panel, transports):
        start_with_sato(panel, transports)

        result = panel.print_label(PrintIntent(printer_id='SATO_COM9'))

        assert not result['success']
        assert result['code'] == 'device_not_found'
        assert panel.channel.status.kind == StatusKind.ERROR


class TestZebraPrinting:

    def test_each_copy_is_sent(self, panel, transports, zebra_device):
        start_with_sato(panel, transports)

        result = panel.print_label(PrintIntent(printer_id='ZEBRA_ZB-001', kind=LabelKind.QR,
                                               qr_data='https://example.com', copies=3))

        assert result['success']
        assert result['copies_printed'] == 3
        assert zebra_device.sent == ['^XA^FO50,50^BQN,2,4^FDQA,https://example.com^FS^XZ'] * 3
        assert panel.zebra_status.message == 'Print succeeded! (3/3)'

    def test_partial_failure_is_reported(self, channel, transports):
        device = FakeDevice('ZB-7', 'ZD621', outcomes=[None, 'Paper out', None])
        panel = PrintPanel(channel=channel, loader=CapabilityLoader(capability=FakeSDK([device])),
                           registry=PrinterRegistry())
        panel.refresh_zebra_devices()

        result = panel.print_label(PrintIntent(printer_id='ZEBRA_ZB-7', copies=3))

        assert not result['success']
        assert result['copies_printed'] == 2
        assert result['error'] == 'Paper out'
        assert panel.zebra_status.kind == StatusKind.ERROR
        assert '(2/3 printed)' in panel.zebra_status.message

    def test_removed_zebra_printer(self, panel, transports):
        start_with_sato(panel, transports)
        panel.registry.update('zebra', [])

        result = panel.print_label(PrintIntent(printer_id='ZEBRA_ZB-001'))

        assert not result['success']
        assert panel.zebra_status.kind == StatusKind.ERROR
