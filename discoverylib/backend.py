"""The backend is the only thing that talks to the container runtime.

It supports the following operations:

inspect(name) -> ContainerState
    What, if anything, is there under that name.

run(request) -> container id
    Start a detached container for a launch request.

stop(name)
    Stop a running container.

remove(name)
    Remove a container, by default even if it still runs.

Everything above it is written against these four, so tests can put a
fake in its place.
"""

import os
from collections import namedtuple
from subprocess import check_output, CalledProcessError, PIPE

import docker
import docker.errors
import docker.utils

from .errors import LaunchError, RuntimeClientError


ABSENT = 'absent'
STOPPED = 'stopped'
RUNNING = 'running'


class ContainerState(namedtuple('ContainerState', 'status image ip')):
    __slots__ = ()

    @property
    def present(self):
        return self.status != ABSENT

    @property
    def running(self):
        return self.status == RUNNING


ContainerState.absent = ContainerState(ABSENT, None, None)


def state_from_inspect(info):
    """Given ``docker inspect`` output, return a :class:`ContainerState`."""
    running = info.get('State', {}).get('Running', False)
    image = info.get('Config', {}).get('Image')

    network = info.get('NetworkSettings') or {}
    ip = network.get('IPAddress')
    if not ip:
        # Containers on user-defined networks only have per-network IPs.
        for settings in (network.get('Networks') or {}).values():
            if settings and settings.get('IPAddress'):
                ip = settings['IPAddress']
                break
    return ContainerState(RUNNING if running else STOPPED, image, ip or None)


def build_run_command(request):
    """The ``docker run`` command line for a launch request.

    Pass-through arguments are docker command line flags, which is why
    we go through the CLI for this rather than the API.
    """
    cmd = ['docker', 'run', '-d', '--name=%s' % request.name]
    for key, value in sorted(request.env.items()):
        cmd.extend(['-e', '%s=%s' % (key, value)])
    if request.mount:
        cmd.extend(['-v', str(request.mount)])
    cmd.extend(request.docker_args)
    cmd.append(request.image)
    cmd.extend(request.args)
    cmd.append(request.endpoint)
    return cmd


class DockerBackend(object):
    """Uses the docker API to inspect, stop and remove containers, and
    the docker command line to run them.
    """

    def __init__(self, docker_url=None):
        self.docker_url = docker_url
        self._client = None

    @property
    def client(self):
        # Connecting negotiates the API version, so only do it when needed.
        if self._client is None:
            try:
                # Same DOCKER_HOST and TLS settings the docker CLI uses.
                kwargs = docker.utils.kwargs_from_env()
                if self.docker_url:
                    kwargs['base_url'] = self.docker_url
                self._client = docker.APIClient(
                    version='auto', timeout=10, **kwargs)
            except docker.errors.DockerException as e:
                raise RuntimeClientError('Cannot connect to docker: %s' % e)
        return self._client

    def inspect(self, name):
        try:
            info = self.client.inspect_container(name)
        except docker.errors.NotFound:
            return ContainerState.absent
        except docker.errors.APIError as e:
            raise RuntimeClientError(str(e))
        return state_from_inspect(info)

    def run(self, request):
        env = os.environ.copy()
        if self.docker_url:
            env['DOCKER_HOST'] = self.docker_url
        try:
            output = check_output(
                build_run_command(request), stderr=PIPE, env=env)
        except CalledProcessError as e:
            raise LaunchError(
                (e.stderr or e.output or b'').decode('utf-8', 'replace').strip()
                or 'docker run exited with %s' % e.returncode)
        except OSError as e:
            raise LaunchError('Cannot run docker: %s' % e)
        lines = output.decode('utf-8', 'replace').strip().splitlines()
        if not lines:
            raise LaunchError('docker run did not return a container id')
        return lines[-1].strip()

    def stop(self, name):
        try:
            self.client.stop(name, timeout=10)
        except docker.errors.APIError as e:
            raise RuntimeClientError(str(e))

    def remove(self, name, force=True):
        try:
            self.client.remove_container(name, force=force)
        except docker.errors.APIError as e:
            raise RuntimeClientError(str(e))
