import logging
import socket
from collections import namedtuple

import libvirt

from .errors import (
    TransportError,
    SessionError,
    EnumerationError,
    DescriptorError,
    InfoFetchError,
    StatsFetchError,
    ActivityCheckError,
    BlockStatsError,
    InterfaceStatsError,
)


log = logging.getLogger(__name__)

Domain = namedtuple('Domain', ['name', 'uuid', 'handle'])


class LibvirtConnection:
    """Read-only libvirt session owned by a single scrape.

    `uri` is either the path of the libvirtd unix socket, which is dialed
    with `timeout` before libvirt is asked to connect over it, or any libvirt
    connection URI.
    """

    def __init__(self, uri, timeout=5.0):
        self._uri = uri
        self._timeout = timeout
        self._conn = None

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.disconnect()

    def connect(self):
        uri = self._uri
        if uri.startswith('/'):
            self._dial(uri)
            uri = 'qemu+unix:///system?socket=' + uri
        try:
            self._conn = libvirt.openReadOnly(uri)
        except libvirt.libvirtError as e:
            raise SessionError("failed to connect to %s: %s" % (uri, e)) from e
        if self._conn is None:
            raise SessionError("failed to connect to %s" % uri)
        log.debug("Connected to %s", uri)

    def _dial(self, path):
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(self._timeout)
        try:
            sock.connect(path)
        except OSError as e:
            raise TransportError("failed to dial %s: %s" % (path, e)) from e
        finally:
            sock.close()

    def disconnect(self):
        if not self._conn:
            return
        try:
            self._conn.close()
        except libvirt.libvirtError as e:
            log.debug("Closing libvirt connection failed: %s", e)
        self._conn = None
        log.debug("Disconnected from %s", self._uri)

    def list_domains(self):
        try:
            return [Domain(dom.name(), dom.UUID(), dom)
                    for dom in self._conn.listAllDomains()]
        except libvirt.libvirtError as e:
            raise EnumerationError("failed to load domains: %s" % e) from e

    def domain_xml(self, domain):
        try:
            return domain.handle.XMLDesc(0)
        except libvirt.libvirtError as e:
            raise DescriptorError("failed to get domain xml: %s" % e) from e

    def domain_info(self, domain):
        try:
            state, max_memory, memory, vcpus, cpu_time = domain.handle.info()
        except libvirt.libvirtError as e:
            raise InfoFetchError("failed to get domain info: %s" % e) from e
        return state, max_memory, memory, vcpus, cpu_time

    def memory_stats(self, domain):
        # same as `virsh dommemstat`: {'actual': 8388608, 'rss': 2897276, ...}
        try:
            return domain.handle.memoryStats()
        except libvirt.libvirtError as e:
            raise StatsFetchError("failed to get memory stats: %s" % e) from e

    def is_active(self, domain):
        try:
            return domain.handle.isActive() == 1
        except libvirt.libvirtError as e:
            raise ActivityCheckError("failed to check domain activity: %s" % e) from e

    def block_stats(self, domain, target):
        try:
            rd_req, rd_bytes, wr_req, wr_bytes, _ = domain.handle.blockStats(target)
        except libvirt.libvirtError as e:
            raise BlockStatsError("failed to get block stats of %s: %s" % (target, e)) from e
        return rd_req, rd_bytes, wr_req, wr_bytes

    def interface_stats(self, domain, target):
        try:
            return tuple(domain.handle.interfaceStats(target))
        except libvirt.libvirtError as e:
            raise InterfaceStatsError("failed to get interface stats of %s: %s" % (target, e)) from e
