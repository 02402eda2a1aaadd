"""Syntax checks for host names, IPv4 addresses and ports.

These only look at the string; nothing is resolved.
"""

import re
from collections import namedtuple

from .errors import InvalidAddress


HOSTNAME_RE = re.compile(
    r'^(([a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9\-]*[a-zA-Z0-9])\.)*'
    r'([A-Za-z0-9]|[A-Za-z0-9][A-Za-z0-9\-]*[A-Za-z0-9])\Z')

_OCTET = r'([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])'
IPV4_RE = re.compile(r'^(%s\.){3}%s\Z' % (_OCTET, _OCTET))

PORT_RE = re.compile(r'^[0-9]+\Z')


def is_valid_hostname(s):
    return bool(HOSTNAME_RE.match(s))


def is_valid_ipv4(s):
    return bool(IPV4_RE.match(s))


def is_valid_port(s):
    # ``str.isdigit`` would accept non-ASCII digits.
    return bool(PORT_RE.match(s)) and int(s) <= 65535


def is_valid_address(s):
    return is_valid_hostname(s) or is_valid_ipv4(s)


def split_address(s):
    """Split ``host[:port]`` on the first colon.

    The port is ``None`` if there is no colon at all, and an empty
    string for a trailing colon.
    """
    host, sep, port = s.partition(':')
    return host, (port if sep else None)


def is_valid_address_and_port(s):
    host, port = split_address(s)
    if not is_valid_address(host):
        return False
    if port is not None and not is_valid_port(port):
        return False
    return True


def validate_address(s, label):
    if not is_valid_address(s):
        raise InvalidAddress(s, label)
    return s


def validate_address_and_port(s, label):
    if not is_valid_address_and_port(s):
        raise InvalidAddress(s, label)
    return s


class Address(namedtuple('Address', 'host port')):
    """A host with an optional port, compared by its string form."""

    __slots__ = ()

    def __str__(self):
        if self.port is None:
            return self.host
        return '%s:%s' % (self.host, self.port)

    def __eq__(self, other):
        if isinstance(other, Address):
            return str(self) == str(other)
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(str(self))
