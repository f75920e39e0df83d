import os
from xml.etree.ElementTree import ParseError

import pytest

from libvirt_exporter.virt.errors import DescriptorParseError
from libvirt_exporter.virt.parser import parse_domain_xml, Disk, Interface


def fixture_xml():
    with open(os.path.join(os.path.dirname(__file__), "vm.xml")) as f:
        return f.read()


def test_xml():
    result = parse_domain_xml(fixture_xml())
    assert result.disks == [
        Disk("disk", "/var/lib/libvirt/images/fedora.qcow2", "vda"),
        Disk("disk", "/dev/vg0/data", "vdb"),
        Disk("cdrom", "/var/lib/libvirt/images/Fedora-Server.iso", "sda"),
        Disk("floppy", "", "fda"),
    ]
    assert result.interfaces == [
        Interface("br0", "vnet3"),
        Interface("", ""),
    ]


def test_serial_source_is_not_a_device():
    result = parse_domain_xml(fixture_xml())
    assert "/dev/pts/2" not in [disk.source for disk in result.disks]


def test_disk_device_defaults_to_disk():
    xml = "<domain><devices><disk type='file'><target dev='hda'/></disk></devices></domain>"
    assert parse_domain_xml(xml).disks == [Disk("disk", "", "hda")]


def test_no_devices():
    result = parse_domain_xml("<domain><name>empty</name></domain>")
    assert result.disks == []
    assert result.interfaces == []


def test_malformed_xml():
    with pytest.raises(DescriptorParseError) as excinfo:
        parse_domain_xml("<domain><devices></domain>")
    assert isinstance(excinfo.value.__cause__, ParseError)
