"""Bootstrap a discovery container for the weave router.

``join`` works out which address peers should reach our router at,
and starts the discovery container with it; ``leave`` stops it again.
"""

__version__ = '0.1'
