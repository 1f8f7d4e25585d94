from schooldesk.dashboard import Dashboard
from schooldesk.lib.get_platform import get_platform
from schooldesk.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    Dashboard.__name__,
    get_platform.__name__,
]
