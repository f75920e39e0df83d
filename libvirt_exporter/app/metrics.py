from collections import namedtuple

from prometheus_client.core import GaugeMetricFamily, CounterMetricFamily


Sample = namedtuple('Sample', ['metric', 'value', 'labels'])

DOMAIN_LABELS = ('domain', 'uuid')
BLOCK_LABELS = DOMAIN_LABELS + ('source_file', 'target_device')
INTERFACE_LABELS = DOMAIN_LABELS + ('source_bridge', 'target_device')


class Metric:

    family = None

    def __init__(self, name, description, labels=()):
        self.name = name
        self.description = description
        self.labels = tuple(labels)

    def sample(self, value, *labels):
        if len(labels) != len(self.labels):
            raise ValueError("%s expects labels %s, got %r" % (self.name, self.labels, labels))
        return Sample(self, float(value), labels)

    def new_family(self):
        return self.family(self.name, self.description, labels=self.labels)

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.name)


class Gauge(Metric):

    family = GaugeMetricFamily


class Counter(Metric):

    family = CounterMetricFamily


def fqname(namespace, subsystem, name):
    return '_'.join(part for part in (namespace, subsystem, name) if part)


class Metrics:
    """All metric families exported for one namespace.

    The set of families and their label schemas is fixed at construction.
    """

    def __init__(self, namespace='libvirt'):
        self.namespace = namespace

        def gauge(subsystem, name, description, labels=()):
            return Gauge(fqname(namespace, subsystem, name), description, labels)

        def counter(subsystem, name, description, labels):
            return Counter(fqname(namespace, subsystem, name), description, labels)

        # misc
        self.up = gauge('', 'up', "Whether scraping libvirt's metrics was successful.")
        self.domains = gauge('', 'domains_total', "Number of the domain")
        self.scrape_error = gauge('', 'scrape_error', "Scrape status of libvirt")
        self.scrape_latency = gauge('', 'scrape_latency', "Scrape latency in second")

        # domain
        self.state = gauge('', 'domain_state', "Code of the domain state",
                           DOMAIN_LABELS + ('state',))
        self.max_memory = gauge('domain_info', 'maximum_memory_bytes',
                                "Maximum allowed memory of the domain, in bytes.", DOMAIN_LABELS)
        self.memory = gauge('domain_info', 'memory_usage_bytes',
                            "Memory usage of the domain, in bytes.", DOMAIN_LABELS)
        self.rss = gauge('domain_info', 'memory_rss_bytes',
                         "Resident set size of the domain, in bytes.", DOMAIN_LABELS)
        self.vcpus = gauge('domain_info', 'virtual_cpus',
                           "Number of virtual CPUs for the domain.", DOMAIN_LABELS)
        self.cpu_time = counter('domain_info', 'cpu_time_seconds_total',
                                "Amount of CPU time used by the domain, in seconds.", DOMAIN_LABELS)

        # block
        self.block_read_bytes = counter('domain_block', 'read_bytes_total',
                                        "Number of bytes read from a block device, in bytes.", BLOCK_LABELS)
        self.block_read_requests = counter('domain_block', 'read_requests_total',
                                           "Number of read requests from a block device.", BLOCK_LABELS)
        self.block_write_bytes = counter('domain_block', 'write_bytes_total',
                                         "Number of bytes written to a block device, in bytes.", BLOCK_LABELS)
        self.block_write_requests = counter('domain_block', 'write_requests_total',
                                            "Number of write requests to a block device.", BLOCK_LABELS)

        # interface
        self.receive_bytes = counter('domain_interface', 'receive_bytes_total',
                                     "Number of bytes received on a network interface, in bytes.", INTERFACE_LABELS)
        self.receive_packets = counter('domain_interface', 'receive_packets_total',
                                       "Number of packets received on a network interface.", INTERFACE_LABELS)
        self.receive_errors = counter('domain_interface', 'receive_errors_total',
                                      "Number of packet receive errors on a network interface.", INTERFACE_LABELS)
        self.receive_drops = counter('domain_interface', 'receive_drops_total',
                                     "Number of packet receive drops on a network interface.", INTERFACE_LABELS)
        self.transmit_bytes = counter('domain_interface', 'transmit_bytes_total',
                                      "Number of bytes transmitted on a network interface, in bytes.", INTERFACE_LABELS)
        self.transmit_packets = counter('domain_interface', 'transmit_packets_total',
                                        "Number of packets transmitted on a network interface.", INTERFACE_LABELS)
        self.transmit_errors = counter('domain_interface', 'transmit_errors_total',
                                       "Number of packet transmit errors on a network interface.", INTERFACE_LABELS)
        self.transmit_drops = counter('domain_interface', 'transmit_drops_total',
                                      "Number of packet transmit drops on a network interface.", INTERFACE_LABELS)

    def __iter__(self):
        return iter((
            self.up, self.domains, self.scrape_error, self.scrape_latency,
            self.state, self.max_memory, self.memory, self.rss, self.vcpus, self.cpu_time,
            self.block_read_bytes, self.block_read_requests,
            self.block_write_bytes, self.block_write_requests,
            self.receive_bytes, self.receive_packets, self.receive_errors, self.receive_drops,
            self.transmit_bytes, self.transmit_packets, self.transmit_errors, self.transmit_drops,
        ))
