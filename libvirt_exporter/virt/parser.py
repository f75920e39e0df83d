from collections import namedtuple
from xml.etree.ElementTree import XMLParser, ParseError

from .errors import DescriptorParseError


Disk = namedtuple('Disk', ['device', 'source', 'target'])
Interface = namedtuple('Interface', ['bridge', 'target'])
DomainDescriptor = namedtuple('DomainDescriptor', ['disks', 'interfaces'])


class DomainXmlParser:
    """Parser target which only keeps the block devices and network
    interfaces found under /domain/devices."""

    def __init__(self):
        self.disks = []
        self.interfaces = []
        self.stack = []
        self.device = None

    def start(self, tag, attrib):
        in_devices = self.stack == ["domain", "devices"]
        self.stack.append(tag)
        if in_devices:
            if tag == "disk":
                self.device = {"family": tag,
                               "device": attrib.get("device", "disk"),
                               "source": "", "target": ""}
            elif tag == "interface":
                self.device = {"family": tag, "source": "", "target": ""}
        elif self.device is not None and len(self.stack) == 4:
            if tag == "source":
                if self.device["family"] == "disk":
                    self.device["source"] = attrib.get("file") or attrib.get("dev", "")
                else:
                    self.device["source"] = attrib.get("bridge", "")
            elif tag == "target":
                self.device["target"] = attrib.get("dev", "")

    def end(self, tag):
        self.stack.pop()
        if self.device is not None and len(self.stack) == 2:
            if self.device["family"] == "disk":
                self.disks.append(Disk(self.device["device"],
                                       self.device["source"],
                                       self.device["target"]))
            else:
                self.interfaces.append(Interface(self.device["source"],
                                                 self.device["target"]))
            self.device = None

    def data(self, data):
        pass

    def close(self):
        return DomainDescriptor(self.disks, self.interfaces)


def parse_domain_xml(xml):
    target = DomainXmlParser()
    parser = XMLParser(target=target)
    try:
        parser.feed(xml)
        return parser.close()
    except ParseError as e:
        raise DescriptorParseError("failed to parse domain xml: %s" % e) from e
