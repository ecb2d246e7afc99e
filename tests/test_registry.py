"""
Tests for the merged printer registry.
"""

import pytest

from label_print_panel.exceptions import DeviceNotFound
from label_print_panel.models import DeviceDescriptor
from label_print_panel.registry import PrinterRegistry


def sato(port):
    return DeviceDescriptor(id=f'SATO_{port}', label=f'SATO: {port}', vendor='sato', handle=port)


def zebra(uid):
    return DeviceDescriptor(id=f'ZEBRA_{uid}', label=f'ZEBRA: {uid}', vendor='zebra')


@pytest.fixture
def registry():
    return PrinterRegistry()


def test_sato_entries_come_first(registry):
    registry.update('zebra', [zebra('z1')])
    registry.update('sato', [sato('COM1')])

    assert [p.id for p in registry.printers] == ['SATO_COM1', 'ZEBRA_z1']


def test_first_entry_selected_by_default(registry):
    registry.update('zebra', [zebra('z1'), zebra('z2')])

    assert registry.selected_id == 'ZEBRA_z1'


def test_selection_survives_merge_when_present(registry):
    registry.update('zebra', [zebra('z1'), zebra('z2')])
    registry.select('ZEBRA_z2')

    registry.update('sato', [sato('COM1')])

    assert registry.selected_id == 'ZEBRA_z2'


def test_removed_selection_falls_back_to_first(registry):
    registry.update('sato', [sato('COM1')])
    registry.update('zebra', [zebra('z1')])
    registry.select('ZEBRA_z1')

    registry.update('zebra', [zebra('z9')])

    assert registry.selected_id == 'SATO_COM1'


def test_empty_list_selects_none(registry):
    registry.update('sato', [sato('COM1')])
    registry.update('sato', [])

    assert registry.selected_id is None
    assert registry.selected is None


def test_select_unknown_raises(registry):
    with pytest.raises(DeviceNotFound):
        registry.select('SATO_NOPE')


def test_resolve_defaults_to_selection(registry):
    registry.update('sato', [sato('COM1')])

    assert registry.resolve().id == 'SATO_COM1'
    assert registry.resolve('SATO_COM1').handle == 'COM1'


def test_resolve_missing(registry):
    with pytest.raises(DeviceNotFound) as exc:
        registry.resolve()
    assert exc.value.message == 'No printer selected'
