import requests

from .config import ROUTER_HTTP_PORT
from .errors import RouterUnreachable


def router_url(host, port=ROUTER_HTTP_PORT):
    return 'http://%s:%s' % (host, port)


class RouterClient(object):
    """Simple interface to the router's HTTP status endpoint.
    """

    def __init__(self, url, timeout=5):
        self.url = url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

    def status(self):
        try:
            response = self.session.get(
                '%s/status' % self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise RouterUnreachable(
                'Router at %s is not reachable: %s' % (self.url, e))
        return response.text
