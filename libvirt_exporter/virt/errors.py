class ExporterError(Exception):
    pass


class TransportError(ExporterError):
    """The libvirtd socket could not be reached."""


class SessionError(ExporterError):
    """The libvirt handshake failed."""


class EnumerationError(ExporterError):
    pass


class DescriptorError(ExporterError):
    pass


class DescriptorParseError(DescriptorError):
    pass


class InfoFetchError(ExporterError):
    pass


class StatsFetchError(ExporterError):
    pass


class BlockStatsError(StatsFetchError):
    pass


class InterfaceStatsError(StatsFetchError):
    pass


class ActivityCheckError(ExporterError):
    pass


class DataConsistencyError(ExporterError):
    """libvirt reported a value outside of what the exporter knows."""


class DomainCollectError(ExporterError):

    def __init__(self, name, uuid, reason):
        ExporterError.__init__(self, "domain %s (%s): %s" % (name, uuid, reason))
        self.name = name
        self.uuid = uuid
        self.reason = reason
