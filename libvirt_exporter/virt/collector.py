import binascii
import logging

from .errors import ExporterError, DataConsistencyError, DomainCollectError
from .parser import parse_domain_xml


log = logging.getLogger(__name__)

DOMAIN_STATES = {
    0: "nostate",
    1: "running",
    2: "blocked",
    3: "paused",
    4: "shutdown",
    5: "shutoff",
    6: "crashed",
    7: "pmsuspended",
    8: "last",
}

# These never expose meaningful I/O counters. libvirt spells floppies
# "floppy", some tools write "fd".
SKIPPED_DISK_DEVICES = frozenset(("cdrom", "floppy", "fd"))

ZERO_BLOCK_STATS = (0, 0, 0, 0)
ZERO_INTERFACE_STATS = (0, 0, 0, 0, 0, 0, 0, 0)


def format_uuid(raw):
    """Return the canonical 8-4-4-4-12 lowercase form of a 16 byte uuid."""
    h = binascii.hexlify(bytes(raw)).decode('ascii')
    return '-'.join((h[:8], h[8:12], h[12:16], h[16:20], h[20:]))


def dom_state_to_string(state):
    try:
        return DOMAIN_STATES[state]
    except KeyError:
        raise DataConsistencyError("unknown domain state %r" % (state,))


class DomainCollector:
    """Turns everything libvirt knows about one domain into samples.

    Samples are returned in a fixed order: state, memory figures, vcpus, cpu
    time, then four counters per block device and eight per network
    interface. The list is only returned once the whole domain was read, so a
    failing domain never contributes a partial set of samples.
    """

    def __init__(self, metrics):
        self.metrics = metrics

    def collect(self, session, domain):
        uuid = format_uuid(domain.uuid)
        try:
            return self._collect(session, domain, domain.name, uuid)
        except ExporterError as e:
            raise DomainCollectError(domain.name, uuid, e) from e

    def _collect(self, session, domain, name, uuid):
        m = self.metrics
        descriptor = parse_domain_xml(session.domain_xml(domain))
        state, max_memory, memory, vcpus, cpu_time = session.domain_info(domain)
        # libvirt refuses memory and I/O stats for domains which are not running
        active = session.is_active(domain)
        memory_stats = session.memory_stats(domain) if active else {}

        samples = [
            m.state.sample(state, name, uuid, dom_state_to_string(state)),
            m.max_memory.sample(max_memory * 1024, name, uuid),
            m.memory.sample(memory * 1024, name, uuid),
        ]
        # not every hypervisor driver reports rss
        if 'rss' in memory_stats:
            samples.append(m.rss.sample(memory_stats['rss'] * 1024, name, uuid))
        samples.append(m.vcpus.sample(vcpus, name, uuid))
        samples.append(m.cpu_time.sample(cpu_time / 1e9, name, uuid))

        disks = [disk for disk in descriptor.disks
                 if disk.device not in SKIPPED_DISK_DEVICES]
        interfaces = [iface for iface in descriptor.interfaces if iface.target]
        log.debug("Domain %s (%s): state=%s active=%s disks=%d interfaces=%d",
                  name, uuid, state, active, len(disks), len(interfaces))

        for disk in disks:
            if active:
                rd_req, rd_bytes, wr_req, wr_bytes = session.block_stats(domain, disk.target)
            else:
                rd_req, rd_bytes, wr_req, wr_bytes = ZERO_BLOCK_STATS
            labels = (name, uuid, disk.source, disk.target)
            samples.extend((
                m.block_read_bytes.sample(rd_bytes, *labels),
                m.block_read_requests.sample(rd_req, *labels),
                m.block_write_bytes.sample(wr_bytes, *labels),
                m.block_write_requests.sample(wr_req, *labels),
            ))

        for iface in interfaces:
            if active:
                stats = session.interface_stats(domain, iface.target)
            else:
                stats = ZERO_INTERFACE_STATS
            rx_bytes, rx_packets, rx_errs, rx_drop, tx_bytes, tx_packets, tx_errs, tx_drop = stats
            labels = (name, uuid, iface.bridge, iface.target)
            samples.extend((
                m.receive_bytes.sample(rx_bytes, *labels),
                m.receive_packets.sample(rx_packets, *labels),
                m.receive_errors.sample(rx_errs, *labels),
                m.receive_drops.sample(rx_drop, *labels),
                m.transmit_bytes.sample(tx_bytes, *labels),
                m.transmit_packets.sample(tx_packets, *labels),
                m.transmit_errors.sample(tx_errs, *labels),
                m.transmit_drops.sample(tx_drop, *labels),
            ))

        return samples
