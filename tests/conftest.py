import mock
import pytest
import responses as responses_lib

from discoverylib.backend import ContainerState, RUNNING, STOPPED
from discoverylib.cli import App
from discoverylib.config import Settings
from discoverylib.context import Context
from discoverylib.errors import RuntimeClientError
from discoverylib.lifecycle import Lifecycle


class FakeBackend(object):
    """In-memory stand-in for :class:`DockerBackend`.

    Records every call that changes something in ``calls``.
    """

    def __init__(self):
        self.containers = {}
        self.calls = []
        self.container_id = 'f00dfeed'

    def add(self, name, image, running=True, ip=None):
        self.containers[name] = ContainerState(
            RUNNING if running else STOPPED, image, ip)

    def inspect(self, name):
        return self.containers.get(name, ContainerState.absent)

    def run(self, request):
        self.calls.append(('run', request))
        self.add(request.name, request.image)
        return self.container_id

    def stop(self, name):
        self.calls.append(('stop', name))
        state = self.inspect(name)
        if not state.running:
            raise RuntimeClientError('%s is not running' % name)
        self.containers[name] = state._replace(status=STOPPED)

    def remove(self, name, force=True):
        self.calls.append(('remove', name))
        if name not in self.containers:
            raise RuntimeClientError('No such container: %s' % name)
        del self.containers[name]

    def called(self, method):
        return [args for m, args in self.calls if m == method]


class TestContext(Context):
    def __init__(self):
        self.items = []
    def custom(self, **kwargs):
        self.items.append(kwargs)
    def filter(self, key):
        return [i[key] for i in self.items if key in i]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def context():
    return TestContext()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def lifecycle(backend, context):
    return Lifecycle(backend, context)


@pytest.fixture
def resolvers():
    """Fake external IP and default route lookups."""
    external = mock.Mock()
    external.lookup.return_value = '203.0.113.7'
    default_route = mock.Mock()
    default_route.lookup.return_value = '192.168.1.20'
    return external, default_route


@pytest.fixture
def app(settings, backend, context, resolvers):
    external, default_route = resolvers
    return App(settings=settings, backend=backend, context=context,
               external_ip_resolver=external,
               default_route_resolver=default_route)


@pytest.fixture
def router(backend, settings):
    """A running local router container."""
    backend.add(settings.weave_container_name, 'weaveworks/weave:latest',
                ip='172.17.0.2')


@pytest.fixture()
def responses(request):
    """Mock the requests library using responses.

    Return a RequestsMock instance rather than using the global default.
    """
    mock = responses_lib.RequestsMock()
    mock.start()
    request.addfinalizer(mock.stop)
    return mock
