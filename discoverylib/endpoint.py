"""Discovery endpoints are URLs like ``etcd://host/path``.

The discovery process runs inside a container and cannot see the
host filesystem, so a ``file://`` endpoint has to be bind-mounted into
the container and rewritten to point at the mounted copy. All other
schemes are handed to the discovery process as they are.
"""

import os
import re
from os import path
from collections import namedtuple

from .errors import InvalidEndpoint, FileNotFound


STAGING_DIR = '/tmp'


class Endpoint(namedtuple('Endpoint', 'scheme path')):
    __slots__ = ()

    def __str__(self):
        return '%s://%s' % (self.scheme, self.path)


class MountSpec(namedtuple('MountSpec', 'host_path container_path')):
    __slots__ = ()

    def __str__(self):
        """The ``-v`` value for the docker command line."""
        return '%s:%s' % (self.host_path, self.container_path)


def parse_endpoint(s):
    scheme, sep, rest = s.partition('://')
    if not sep or not scheme:
        raise InvalidEndpoint(s)
    return Endpoint(scheme, rest)


def transform_endpoint(s, staging_dir=STAGING_DIR, exists=os.path.exists):
    """Return ``(endpoint, mount)`` where ``mount`` is ``None`` unless
    this is a file endpoint.
    """
    endpoint = parse_endpoint(s)
    if endpoint.scheme != 'file':
        return s, None

    # Anything between ``file://`` and the first slash is a host name,
    # which we ignore.
    _, sep, rest = endpoint.path.partition('/')
    if not sep:
        raise InvalidEndpoint(s, 'file endpoint has no path')
    host_path = re.sub(r'/+', '/', '/' + rest)
    if not exists(host_path):
        raise FileNotFound(host_path)

    container_path = path.join(staging_dir, path.basename(host_path))
    mount = MountSpec(host_path, container_path)
    return str(Endpoint('file', container_path)), mount
