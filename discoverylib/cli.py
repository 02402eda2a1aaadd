#!/usr/bin/env python
import functools
import sys

import click
from clint.textui import puts, indent

from .advertise import AdvertiseMode, ExternalIPResolver, DefaultRouteResolver
from .backend import DockerBackend
from .config import Settings
from .context import Context
from .errors import (
    DiscoveryError, ContainerNotPresent, ContainerNotRunning, MissingEndpoint)
from .launch import JoinOptions, Launcher
from .lifecycle import Lifecycle
from .router import RouterClient, router_url


class App(object):
    """Wires the components together for one invocation."""

    def __init__(self, settings=None, backend=None, context=None,
                 external_ip_resolver=None, default_route_resolver=None):
        self.settings = settings or Settings.from_environ()
        self.backend = backend or DockerBackend(self.settings.docker_url)
        self.context = context or Context()
        self.lifecycle = Lifecycle(self.backend, self.context)
        self.launcher = Launcher(
            self.settings, self.lifecycle, self.backend, self.context,
            external_ip_resolver or ExternalIPResolver(),
            default_route_resolver or DefaultRouteResolver())


def parse_join_args(tokens):
    """Given the ``join`` arguments, return a :class:`JoinOptions`.

    Our own flags come first and are read until the first token that
    is not one of them. After that, the last token is the endpoint and
    everything before it goes to ``docker run``.
    """
    explicit = None
    external = router = False
    discovered_port = router_address = None

    tokens = list(tokens)
    while tokens:
        token = tokens[0]
        if token.startswith('--advertise='):
            # First one wins
            if explicit is None:
                explicit = token.split('=', 1)[1]
        elif token == '--advertise-external':
            external = True
        elif token == '--advertise-router':
            router = True
        elif token.startswith('--discovered-port='):
            discovered_port = token.split('=', 1)[1]
        elif token.startswith('--weave='):
            router_address = token.split('=', 1)[1]
        else:
            break
        tokens.pop(0)

    if not tokens:
        raise MissingEndpoint()

    return JoinOptions(
        endpoint=tokens[-1],
        advertise=AdvertiseMode.choose(explicit, external, router),
        discovered_port=discovered_port,
        router_address=router_address,
        docker_args=tokens[:-1])


def reports_errors(f):
    """Turn our own errors into a message and exit code 1."""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except DiscoveryError as e:
            raise click.ClickException(str(e))
    return wrapper


@click.group()
@click.pass_context
def main(ctx):
    """Join or leave peer discovery for the weave router.
    """
    if ctx.obj is None:
        ctx.obj = App()


@main.command(context_settings={
    'ignore_unknown_options': True, 'allow_interspersed_args': False})
@click.argument('args', nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
@reports_errors
def join(app, args):
    """Start the discovery container.

    \b
    join [--advertise=ADDR[:PORT] | --advertise-external | --advertise-router]
         [--discovered-port=PORT] [--weave=ADDR] [DOCKER-ARGS...] ENDPOINT

    ENDPOINT is etcd://, consul:// or file:// followed by a path.
    """
    options = parse_join_args(args)
    container_id = app.launcher.join(options)
    click.echo(container_id)


@main.command()
@click.pass_context
@reports_errors
def leave(ctx):
    """Stop and remove the discovery container.
    """
    app = ctx.obj
    name = app.settings.discovery_container_name
    state = app.lifecycle.stop(name)
    if not state.present:
        ctx.exit(ContainerNotPresent.exit_code)
    if not state.running:
        ctx.exit(ContainerNotRunning.exit_code)


@main.command()
@click.option('--weave', 'router_address', default=None,
              help='Router address, if not the local router container.')
@click.pass_context
@reports_errors
def status(ctx, router_address):
    """Show the discovery container and router state.
    """
    app = ctx.obj
    name = app.settings.discovery_container_name
    exit_code = 0
    try:
        state = app.lifecycle.check_running(name)
    except (ContainerNotPresent, ContainerNotRunning) as e:
        app.context.warn(str(e))
        exit_code = e.exit_code
    else:
        puts('-----> %s is running' % name)
        with indent(7):
            puts('image: %s' % state.image)
            puts('ip: %s' % (state.ip or '-'))

    if router_address is None:
        try:
            router_address = app.lifecycle.resolve_router_ip(
                app.settings.weave_container_name).host
        except DiscoveryError as e:
            app.context.warn(str(e))
    if router_address is not None:
        url = router_url(router_address)
        try:
            RouterClient(url).status()
        except DiscoveryError as e:
            app.context.error(str(e))
        else:
            puts('-----> router at %s is reachable' % url)
    ctx.exit(exit_code)


@main.command('help')
@click.pass_context
def help_(ctx):
    """Show this message.
    """
    click.echo(ctx.parent.get_help())


def run():
    sys.exit(main(sys.argv[1:]) or None)


if __name__ == '__main__':
    run()
