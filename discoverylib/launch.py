"""Put together and submit the discovery container for ``join``.
"""

import os
from collections import namedtuple

from .address import validate_address, is_valid_port
from .advertise import AdvertiseMode, resolve_advertise
from .config import DISCOVERY_HTTP_IFACE, DISCOVERY_HTTP_PORT, ROUTER_PORT
from .endpoint import transform_endpoint
from .errors import InvalidPort
from .router import router_url


class JoinOptions(namedtuple('JoinOptions', [
        'endpoint', 'advertise', 'discovered_port', 'router_address',
        'docker_args'])):
    """Everything the ``join`` command line said.

    ``advertise`` is an :class:`AdvertiseMode`; ``router_address`` is
    the ``--weave`` value or ``None``.
    """
    __slots__ = ()

    def __new__(cls, endpoint, advertise=AdvertiseMode.none,
                discovered_port=None, router_address=None, docker_args=()):
        return super(JoinOptions, cls).__new__(
            cls, endpoint, advertise, discovered_port, router_address,
            tuple(docker_args))


LaunchRequest = namedtuple('LaunchRequest', [
    'name', 'image', 'args', 'endpoint', 'mount', 'env', 'docker_args'])


# Keep the discovery container off the overlay network.
DISCOVERY_ENV = {'WEAVE_CIDR': 'none'}


class Launcher(object):
    """Runs the ``join`` sequence: router address, advertised address,
    endpoint, then the container itself.
    """

    def __init__(self, settings, lifecycle, backend, context,
                 external_ip_resolver, default_route_resolver,
                 exists=os.path.exists):
        self.settings = settings
        self.lifecycle = lifecycle
        self.backend = backend
        self.context = context
        self.external_ip_resolver = external_ip_resolver
        self.default_route_resolver = default_route_resolver
        self.exists = exists

    def resolve_router(self, options):
        """Return ``(host, is_remote)``."""
        if options.router_address is not None:
            return validate_address(options.router_address, 'router'), True
        address = self.lifecycle.resolve_router_ip(
            self.settings.weave_container_name)
        return validate_address(address.host, 'router'), False

    def build_request(self, options):
        router_host, router_is_remote = self.resolve_router(options)

        args = ['-http-iface', DISCOVERY_HTTP_IFACE,
                '-http-port', str(DISCOVERY_HTTP_PORT)]

        advertised = resolve_advertise(
            options.advertise, router_host, router_is_remote,
            self.external_ip_resolver, self.default_route_resolver,
            self.context, peer_port=ROUTER_PORT)
        if advertised:
            args.extend(['-local', advertised])

        if options.discovered_port is not None:
            if not is_valid_port(options.discovered_port):
                raise InvalidPort(options.discovered_port)
            args.extend(['-discovered-port', options.discovered_port])

        endpoint, mount = transform_endpoint(
            options.endpoint, exists=self.exists)

        args.extend(['-weave', router_url(router_host)])

        return LaunchRequest(
            name=self.settings.discovery_container_name,
            image=self.settings.image,
            args=tuple(args),
            endpoint=endpoint,
            mount=mount,
            env=dict(DISCOVERY_ENV),
            docker_args=tuple(self.settings.discovery_docker_args) +
                tuple(options.docker_args))

    def join(self, options):
        """Launch the discovery container, return its id."""
        request = self.build_request(options)
        self.lifecycle.check_not_running(request.name, request.image)
        if request.mount:
            self.context.log('Mounting %s' % (request.mount,))
        return self.backend.run(request)
