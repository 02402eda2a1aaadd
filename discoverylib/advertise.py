"""Decide which address other peers should use to reach our router.

Only one mode is active per invocation. The command line picks it from
the flags given:

``--advertise=ADDR[:PORT]``
    Advertise exactly that, no port is added.

``--advertise-external``
    Look up our public IP through DNS; advertise it with the router port.

``--advertise-router``
    If the router address was given with ``--weave``, advertise that.
    Otherwise the router runs locally, and we advertise the address of
    the interface with the default route.

With none of these, nothing is advertised.
"""

from collections import namedtuple
from subprocess import check_output, CalledProcessError

import netifaces

from .address import validate_address_and_port
from .config import ROUTER_PORT
from .errors import (
    InvalidAddress, InvalidAdvertiseAddress, ExternalIPLookupFailed,
    DefaultRouteLookupFailed)


EXPLICIT = 'explicit'
EXTERNAL = 'external'
ROUTER = 'router'
NONE = 'none'


class AdvertiseMode(namedtuple('AdvertiseMode', 'kind address')):
    __slots__ = ()

    @classmethod
    def explicit(cls, address):
        return cls(EXPLICIT, address)

    @classmethod
    def choose(cls, explicit=None, external=False, router=False):
        """Pick the highest-precedence mode among the flags given."""
        if explicit is not None:
            return cls.explicit(explicit)
        if external:
            return cls(EXTERNAL, None)
        if router:
            return cls(ROUTER, None)
        return cls(NONE, None)


AdvertiseMode.none = AdvertiseMode(NONE, None)


class ExternalIPResolver(object):
    """Ask OpenDNS what our IP looks like from the outside."""

    command = ['dig', '+short', 'myip.opendns.com', '@resolver1.opendns.com']

    def lookup(self):
        try:
            output = check_output(self.command)
        except (CalledProcessError, OSError) as e:
            raise ExternalIPLookupFailed(
                'Cannot determine external IP address: %s' % e)
        lines = output.decode('ascii', 'replace').strip().splitlines()
        if not lines or not lines[-1].strip():
            raise ExternalIPLookupFailed(
                'Cannot determine external IP address: empty DNS answer')
        return lines[-1].strip()


class DefaultRouteResolver(object):
    """Address of the interface that holds the IPv4 default route."""

    def lookup(self):
        try:
            _, iface = netifaces.gateways()['default'][netifaces.AF_INET][:2]
            return netifaces.ifaddresses(iface)[netifaces.AF_INET][0]['addr']
        except (KeyError, IndexError, ValueError) as e:
            raise DefaultRouteLookupFailed(
                'Cannot determine the default route address (%s)' % e)


def resolve_advertise(mode, router_address, router_is_remote,
                      external_ip_resolver, default_route_resolver, context,
                      peer_port=ROUTER_PORT):
    """Return the address to advertise as a string, or ``None``.

    ``router_address`` is the router's host, without a port.
    """
    if mode.kind == EXPLICIT:
        address = mode.address
    elif mode.kind == EXTERNAL:
        address = '%s:%s' % (external_ip_resolver.lookup(), peer_port)
    elif mode.kind == ROUTER:
        if router_is_remote:
            host = router_address
        else:
            host = default_route_resolver.lookup()
        address = '%s:%s' % (host, peer_port)
    else:
        context.warn('No --advertise option given, nothing will be advertised')
        return None

    try:
        return validate_address_and_port(address, 'advertised')
    except InvalidAddress:
        raise InvalidAdvertiseAddress(address)
