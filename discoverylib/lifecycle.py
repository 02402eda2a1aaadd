"""Container state checks that make ``join`` and ``leave`` safe to repeat.

Nothing is cached: every check asks the backend again. Two processes
joining at the same time can both pass :meth:`Lifecycle.check_not_running`;
docker's own unique container names then make one of the launches fail.
"""

from .address import Address
from .backend import ContainerState
from .errors import (
    AlreadyRunning, NameCollision, ContainerNotPresent, ContainerNotRunning,
    RouterNotRunning, RouterHasNoAddress, RuntimeClientError)


def image_repository(image):
    """``weaveworks/weavediscovery:1.0`` -> ``weaveworks/weavediscovery``.

    A colon before the last slash belongs to a registry port, not a tag.
    """
    head, _, last = image.rpartition('/')
    last = last.split(':', 1)[0]
    return '%s/%s' % (head, last) if head else last


def same_image(actual, expected):
    """Exact match, or the same repository with any tag."""
    if not actual:
        return False
    return actual == expected or \
        image_repository(actual) == image_repository(expected)


class Lifecycle(object):
    """Checks and changes the state of named containers.

    This is the only thing that stops or removes containers.
    """

    def __init__(self, backend, context):
        self.backend = backend
        self.context = context

    def check_running(self, name):
        state = self.backend.inspect(name)
        if not state.present:
            raise ContainerNotPresent(name)
        if not state.running:
            raise ContainerNotRunning(name)
        return state

    def check_not_running(self, name, expected_image):
        """Make sure ``name`` is free for a new container.

        A stopped leftover of our own image is removed. Anything else
        with that name is left alone and aborts the join.
        """
        state = self.backend.inspect(name)
        if not state.present:
            return
        if same_image(state.image, expected_image):
            if state.running:
                raise AlreadyRunning(name)
            self.backend.remove(name)
            return
        raise NameCollision(name, state.image, state.running)

    def stop(self, name):
        """Stop and remove; neither is an error if there is nothing
        to stop or remove.

        Returns the state the container was in before.
        """
        try:
            state = self.backend.inspect(name)
        except RuntimeClientError:
            state = ContainerState.absent
        running = state.running
        if running:
            try:
                self.backend.stop(name)
            except RuntimeClientError:
                running = False
        if not running:
            self.context.log('%s is not running.' % name)
        try:
            self.backend.remove(name, force=True)
        except RuntimeClientError:
            pass
        return state

    def resolve_router_ip(self, name):
        state = self.backend.inspect(name)
        if not state.running:
            raise RouterNotRunning(name)
        if not state.ip:
            raise RouterHasNoAddress(name)
        return Address(state.ip, None)
