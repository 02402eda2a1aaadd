"""Everything that can go wrong while joining or leaving discovery.

None of these are retried. The command line turns any of them into
an error message and a non-zero exit code.
"""


class DiscoveryError(Exception):
    """Unrecoverable error that aborts the current invocation.

    Nothing is rolled back; whatever the container runtime already did
    stays done.
    """

    exit_code = 1


class ValidationError(DiscoveryError):
    """Malformed input, i.e. an address, port or endpoint."""


class InvalidAddress(ValidationError):

    def __init__(self, value, label):
        ValidationError.__init__(
            self, 'Invalid %s address: %r' % (label, value))
        self.value = value
        self.label = label


class InvalidAdvertiseAddress(InvalidAddress):

    def __init__(self, value):
        InvalidAddress.__init__(self, value, 'advertised')


class InvalidPort(ValidationError):

    def __init__(self, value, label='discovered'):
        ValidationError.__init__(self, 'Invalid %s port: %r' % (label, value))
        self.value = value


class InvalidEndpoint(ValidationError):

    def __init__(self, value, reason='expected scheme://path'):
        ValidationError.__init__(
            self, 'Invalid endpoint %r: %s' % (value, reason))
        self.value = value


class FileNotFound(ValidationError):

    def __init__(self, host_path):
        ValidationError.__init__(self, 'File not found: %s' % host_path)
        self.host_path = host_path


class MissingEndpoint(ValidationError):

    def __init__(self):
        ValidationError.__init__(self, "Missing ENDPOINT, see 'help'.")


class LifecycleError(DiscoveryError):
    """A container is not in the state an operation requires."""

    def __init__(self, name, message):
        DiscoveryError.__init__(self, message)
        self.name = name


class AlreadyRunning(LifecycleError):

    def __init__(self, name):
        LifecycleError.__init__(self, name, '%s is already running.' % name)


class NameCollision(LifecycleError):

    def __init__(self, name, image, running):
        LifecycleError.__init__(self, name, "Found another %scontainer "
            "named '%s' (image %s). Aborting." % (
                'running ' if running else '', name, image))
        self.image = image


class ContainerNotPresent(LifecycleError):
    exit_code = 1

    def __init__(self, name):
        LifecycleError.__init__(self, name, '%s container is not present.' % name)


class ContainerNotRunning(LifecycleError):
    exit_code = 2

    def __init__(self, name):
        LifecycleError.__init__(self, name, '%s container is not running.' % name)


class RouterNotRunning(LifecycleError):

    def __init__(self, name):
        LifecycleError.__init__(self, name,
            '%s container is not running; start it or pass --weave=ADDR.' % name)


class RouterHasNoAddress(LifecycleError):

    def __init__(self, name):
        LifecycleError.__init__(self, name,
            '%s container has no IP address. Is networking disabled?' % name)


class ExternalLookupError(DiscoveryError):
    """A lookup the advertised address depends on failed."""


class ExternalIPLookupFailed(ExternalLookupError):
    pass


class DefaultRouteLookupFailed(ExternalLookupError):
    pass


class RouterUnreachable(ExternalLookupError):
    pass


class LaunchError(DiscoveryError):
    """The container runtime refused to start the discovery container."""


class RuntimeClientError(DiscoveryError):
    """Any other failure talking to the container runtime."""
