import sys

from clint.textui import puts, colored


class Context(object):
    """Where the components report to the user.

    Passed explicitly to everything that talks, so tests can swap in a
    version that records instead of printing.
    """

    def custom(self, **obj):
        if 'log' in obj:
            puts(obj['log'], stream=sys.stderr.write)
        elif 'warning' in obj:
            puts(colored.yellow('Warning: %s' % obj['warning']),
                 stream=sys.stderr.write)
        elif 'error' in obj:
            puts(colored.red('Error: %s' % obj['error']),
                 stream=sys.stderr.write)

    def log(self, msg):
        self.custom(log=msg)

    def warn(self, msg):
        self.custom(warning=msg)

    def error(self, msg):
        self.custom(error=msg)
