from collections import namedtuple

from libvirt_exporter.virt.errors import BlockStatsError, InterfaceStatsError, StatsFetchError


VM_UUID = bytes(range(16))
VM_UUID_STRING = "00010203-0405-0607-0809-0a0b0c0d0e0f"

VM_XML = """<domain type='kvm'>
  <name>vm1</name>
  <uuid>00010203-0405-0607-0809-0a0b0c0d0e0f</uuid>
  <memory unit='KiB'>2097152</memory>
  <devices>
    <disk type='file' device='%(device)s'>
      <driver name='qemu' type='qcow2'/>
      <source file='/var/lib/vm1.qcow2'/>
      <target dev='vda' bus='virtio'/>
    </disk>
    <interface type='bridge'>
      <mac address='52:54:00:12:34:56'/>
      <source bridge='br0'/>
      %(interface_target)s
      <model type='virtio'/>
    </interface>
  </devices>
</domain>
"""

FakeDomain = namedtuple('FakeDomain', ['name', 'uuid'])


class FakeSession:
    """Stands in for LibvirtConnection. Like libvirt, it refuses stats for an
    inactive domain. `fail` maps a method name to the exception it raises."""

    def __init__(self, domains=None, device='disk', interface_target='vnet0',
                 active=True, memory_stats=None, fail=None):
        if domains is None:
            domains = [FakeDomain('vm1', VM_UUID)]
        if memory_stats is None:
            memory_stats = {'actual': 1048576, 'rss': 524288, 'last_update': 0}
        self.domains = domains
        self.device = device
        self.interface_target = interface_target
        self.active = active
        self._memory_stats = memory_stats
        self.fail = fail or {}
        self.calls = []
        self.connected = False
        self.disconnects = 0

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail:
            raise self.fail[name]

    def __enter__(self):
        self._call('connect')
        self.connected = True
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.connected = False
        self.disconnects += 1

    def list_domains(self):
        self._call('list_domains')
        return list(self.domains)

    def domain_xml(self, domain):
        self._call('domain_xml', domain.name)
        target = ""
        if self.interface_target:
            target = "<target dev='%s'/>" % self.interface_target
        return VM_XML % {'device': self.device, 'interface_target': target}

    def domain_info(self, domain):
        self._call('domain_info', domain.name)
        return 1, 2097152, 1048576, 2, 5000000000

    def memory_stats(self, domain):
        self._call('memory_stats', domain.name)
        if not self.active:
            raise StatsFetchError("domain is not running")
        return dict(self._memory_stats)

    def is_active(self, domain):
        self._call('is_active', domain.name)
        return self.active

    def block_stats(self, domain, target):
        self._call('block_stats', domain.name, target)
        if not self.active:
            raise BlockStatsError("domain is not running")
        return 10, 4096, 20, 8192

    def interface_stats(self, domain, target):
        self._call('interface_stats', domain.name, target)
        if not self.active:
            raise InterfaceStatsError("domain is not running")
        return 1000, 10, 1, 2, 2000, 20, 3, 4


