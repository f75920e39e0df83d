import logging
import time
from collections import OrderedDict

from ..virt.collector import DomainCollector
from ..virt.errors import ExporterError


log = logging.getLogger(__name__)


class LibvirtCollector:
    """Custom prometheus_client collector doing one full libvirt scrape per
    collection.

    `connection_factory` returns a fresh, unconnected session context manager
    (see `LibvirtConnection`) for every scrape; nothing is kept between
    scrapes.
    """

    def __init__(self, connection_factory, metrics):
        self.connection_factory = connection_factory
        self.metrics = metrics
        self.domain_collector = DomainCollector(metrics)

    def scrape(self):
        """Yield the samples of one scrape.

        The scrape latency and error samples always come last, also when
        connecting, listing or reading a domain failed halfway.
        """
        m = self.metrics
        start = time.time()
        scrape_error = 0.0
        try:
            for sample in self._scrape():
                yield sample
        except ExporterError as e:
            scrape_error = 1.0
            log.error("collect metrics failed, %s", e)

        yield m.scrape_latency.sample(time.time() - start)
        yield m.scrape_error.sample(scrape_error)

    def _scrape(self):
        m = self.metrics
        with self.connection_factory() as session:
            # Only says that the session could be established
            yield m.up.sample(1.0)

            domains = session.list_domains()
            yield m.domains.sample(len(domains))

            for domain in domains:
                for sample in self.domain_collector.collect(session, domain):
                    yield sample

    def describe(self):
        for metric in self.metrics:
            yield metric.new_family()

    def collect(self):
        families = OrderedDict()
        for sample in self.scrape():
            family = families.get(sample.metric.name)
            if family is None:
                family = families[sample.metric.name] = sample.metric.new_family()
            family.add_metric(list(sample.labels), sample.value)
        for family in families.values():
            yield family
