import mock
import pytest

from discoverylib.address import Address
from discoverylib.errors import (
    AlreadyRunning, NameCollision, ContainerNotPresent, ContainerNotRunning,
    RouterNotRunning, RouterHasNoAddress, RuntimeClientError)
from discoverylib.lifecycle import image_repository, same_image


class TestImages(object):

    def test_repository(self):
        assert image_repository('img') == 'img'
        assert image_repository('img:latest') == 'img'
        assert image_repository('weaveworks/weavediscovery:1.0') == \
            'weaveworks/weavediscovery'
        assert image_repository('registry:5000/weavediscovery') == \
            'registry:5000/weavediscovery'

    def test_same_image(self):
        assert same_image('img', 'img')
        assert same_image('img:latest', 'img')
        assert same_image('img:1.0', 'img:latest')
        assert not same_image('other:latest', 'img')
        assert not same_image(None, 'img')


class TestCheckRunning(object):

    def test_running(self, lifecycle, backend):
        backend.add('d', 'img')
        assert lifecycle.check_running('d').running

    def test_not_present(self, lifecycle):
        with pytest.raises(ContainerNotPresent) as exc:
            lifecycle.check_running('d')
        assert exc.value.exit_code == 1

    def test_not_running(self, lifecycle, backend):
        backend.add('d', 'img', running=False)
        with pytest.raises(ContainerNotRunning) as exc:
            lifecycle.check_running('d')
        assert exc.value.exit_code == 2


class TestCheckNotRunning(object):

    def test_absent(self, lifecycle, backend):
        lifecycle.check_not_running('d', 'img')
        assert backend.calls == []

    def test_already_running(self, lifecycle, backend):
        backend.add('d', 'img:latest')
        with pytest.raises(AlreadyRunning):
            lifecycle.check_not_running('d', 'img')
        assert backend.calls == []

    def test_stale_container_is_removed(self, lifecycle, backend):
        backend.add('d', 'img:0.9', running=False)
        lifecycle.check_not_running('d', 'img')
        assert backend.called('remove') == ['d']
        assert not backend.inspect('d').present

    def test_running_other_image(self, lifecycle, backend):
        """Someone else's container is never touched."""
        backend.add('d', 'other/thing')
        with pytest.raises(NameCollision) as exc:
            lifecycle.check_not_running('d', 'img')
        assert exc.value.image == 'other/thing'
        assert backend.calls == []
        assert backend.inspect('d').running

    def test_stopped_other_image(self, lifecycle, backend):
        backend.add('d', 'other/thing', running=False)
        with pytest.raises(NameCollision):
            lifecycle.check_not_running('d', 'img')
        assert backend.calls == []


class TestStop(object):

    def test_running(self, lifecycle, backend, context):
        backend.add('d', 'img')
        lifecycle.stop('d')
        assert backend.calls == [('stop', 'd'), ('remove', 'd')]
        assert context.items == []

    def test_not_running(self, lifecycle, backend, context):
        backend.add('d', 'img', running=False)
        lifecycle.stop('d')
        assert backend.called('remove') == ['d']
        assert context.filter('log') == ['d is not running.']

    def test_absent(self, lifecycle, backend, context):
        """Removal is still attempted, and its failure ignored."""
        lifecycle.stop('d')
        assert backend.called('remove') == ['d']
        assert context.filter('log') == ['d is not running.']


class TestResolveRouterIP(object):

    def test_running(self, lifecycle, backend):
        backend.add('weave', 'weaveworks/weave', ip='172.17.0.2')
        assert lifecycle.resolve_router_ip('weave') == Address('172.17.0.2', None)

    def test_not_running(self, lifecycle, backend):
        with pytest.raises(RouterNotRunning):
            lifecycle.resolve_router_ip('weave')
        backend.add('weave', 'weaveworks/weave', running=False, ip='172.17.0.2')
        with pytest.raises(RouterNotRunning):
            lifecycle.resolve_router_ip('weave')

    def test_no_ip(self, lifecycle, backend):
        backend.add('weave', 'weaveworks/weave', ip=None)
        with pytest.raises(RouterHasNoAddress):
            lifecycle.resolve_router_ip('weave')


class TestStopReturnsState(object):

    def test_state_before_stop(self, lifecycle, backend):
        backend.add('d', 'img')
        assert lifecycle.stop('d').running
        backend.add('e', 'img', running=False)
        assert not lifecycle.stop('e').running
        assert not lifecycle.stop('f').present

    def test_inspects_once(self, lifecycle, backend):
        backend.add('d', 'img')
        with mock.patch.object(backend, 'inspect', wraps=backend.inspect) as m:
            lifecycle.stop('d')
        assert m.call_count == 1

    def test_inspect_failure(self, lifecycle, backend, context):
        with mock.patch.object(backend, 'inspect',
                               side_effect=RuntimeClientError('down')):
            assert not lifecycle.stop('d').present
        assert backend.called('remove') == ['d']
        assert context.filter('log') == ['d is not running.']
