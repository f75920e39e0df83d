import logging

from flask import Flask
from prometheus_client import CollectorRegistry, make_wsgi_app


LANDING_PAGE = """<html>
<head><title>Libvirt Exporter</title></head>
<body>
<h1>Libvirt Exporter</h1>
<p><a href='%s'>Metrics</a></p>
</body>
</html>"""


def make_rest_app(collector, metrics_path='/metrics', compress=True):
    app = Flask(__name__)

    # set up logging
    if not app.debug:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(logging.ERROR)
        app.logger.addHandler(stream_handler)

    # A registry of our own, so only libvirt metrics are exposed
    app.registry = CollectorRegistry()
    app.registry.register(collector)

    # prometheus_client gzips the response if the scraper accepts it
    prom_metrics = make_wsgi_app(app.registry, disable_compression=not compress)

    @app.route('/')
    def index():
        return LANDING_PAGE % metrics_path

    def metrics():
        return prom_metrics

    app.add_url_rule(metrics_path, 'metrics', metrics)
    return app
