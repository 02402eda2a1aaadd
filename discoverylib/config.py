"""Settings that come from the environment.

Everything that is not configurable lives here as a constant, too.
"""

import os
import shlex


# The discovery process serves its status on this interface and port.
DISCOVERY_HTTP_IFACE = 'eth0'
DISCOVERY_HTTP_PORT = 6789

# The router's peer port (advertised) and its HTTP status port.
ROUTER_PORT = 6783
ROUTER_HTTP_PORT = 6784

DISCOVERY_IMAGE_NAME = 'weavediscovery'


class Settings(object):
    """Read once when the command line starts.

    DOCKERHUB_USER, IMAGE_VERSION
        Repository and tag of the discovery image.

    DISCOVERY_CONTAINER_NAME, WEAVE_CONTAINER_NAME
        Names of the discovery and router containers.

    DISCOVERY_DOCKER_ARGS
        Extra ``docker run`` arguments, split like a shell would.

    DOCKER_HOST
        Docker daemon to talk to; the local socket by default.
    """

    def __init__(self, dockerhub_user='weaveworks', image_version='latest',
                 discovery_container_name='weavediscovery',
                 weave_container_name='weave', discovery_docker_args=None,
                 docker_url=None):
        self.dockerhub_user = dockerhub_user
        self.image_version = image_version
        self.discovery_container_name = discovery_container_name
        self.weave_container_name = weave_container_name
        self.discovery_docker_args = list(discovery_docker_args or [])
        self.docker_url = docker_url

    @classmethod
    def from_environ(cls, environ=None):
        environ = os.environ if environ is None else environ
        return cls(
            dockerhub_user=environ.get('DOCKERHUB_USER', 'weaveworks'),
            image_version=environ.get('IMAGE_VERSION', 'latest'),
            discovery_container_name=environ.get(
                'DISCOVERY_CONTAINER_NAME', 'weavediscovery'),
            weave_container_name=environ.get('WEAVE_CONTAINER_NAME', 'weave'),
            discovery_docker_args=shlex.split(
                environ.get('DISCOVERY_DOCKER_ARGS', '')),
            docker_url=environ.get('DOCKER_HOST') or None)

    @property
    def image(self):
        return '%s/%s:%s' % (
            self.dockerhub_user, DISCOVERY_IMAGE_NAME, self.image_version)
