import argparse
import functools
import logging

from gevent import pywsgi

from .app.metrics import Metrics
from .app.prometheus import LibvirtCollector
from .app.rest import make_rest_app
from .virt.conn import LibvirtConnection


def str2bool(value):
    if value.lower() in ('true', '1', 'yes'):
        return True
    if value.lower() in ('false', '0', 'no'):
        return False
    raise argparse.ArgumentTypeError("expected true or false, got %r" % value)


def parse_listen_address(address):
    host, sep, port = address.rpartition(':')
    if not sep:
        raise argparse.ArgumentTypeError("expected [host]:port, got %r" % address)
    try:
        return host, int(port)
    except ValueError:
        raise argparse.ArgumentTypeError("invalid port in %r" % address)


def make_parser():
    parser = argparse.ArgumentParser(description='Export libvirt domain metrics to prometheus.')
    parser.add_argument('--web.listen-address', dest='listen_address', type=parse_listen_address,
                        default=':5900', help='Address to listen on for web interface and telemetry.')
    parser.add_argument('--web.telemetry-path', dest='metrics_path', type=str, default='/metrics',
                        help='Path under which to expose metrics.')
    parser.add_argument('--web.gzip', dest='gzip', type=str2bool, default=True,
                        help='Enable gzip for http response.')
    parser.add_argument('--libvirt.uri', dest='uri', type=str, default='/var/run/libvirt/libvirt-sock',
                        help='Libvirt socket path or URI from which to extract metrics.')
    parser.add_argument('--libvirt.timeout', dest='timeout', type=float, default=5.0,
                        help='Timeout in seconds for reaching the libvirt socket.')
    parser.add_argument('--namespace', type=str, default='libvirt', help='Namespace for metrics.')
    parser.add_argument('-v', '--verbose', action='store_true', default=False)
    return parser


def make_app(args):
    connection_factory = functools.partial(LibvirtConnection, args.uri, args.timeout)
    collector = LibvirtCollector(connection_factory, Metrics(args.namespace))
    return make_rest_app(collector, args.metrics_path, args.gzip)


def run(argv=None):
    args = make_parser().parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    if args.verbose:
        logging.getLogger('libvirt_exporter').setLevel(level=logging.DEBUG)

    httpd = pywsgi.WSGIServer(args.listen_address, make_app(args))
    logging.getLogger('libvirt_exporter').info(
        "Libvirt exporter started, listening at %s:%s", *args.listen_address)
    httpd.serve_forever()


if __name__ == '__main__':
    run()
