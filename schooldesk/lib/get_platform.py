import os
import sys

from schooldesk.constants import PACKAGE


def get_platform():
    if sys.platform == "darwin":
        return "osx"
    elif sys.platform.startswith("linux"):
        return "linux"
    elif sys.platform.startswith("win"):
        return "windows"
    else:
        return "unknown"


def get_data_directory():
    """
    Returns the writable data directory for the application.
    Windows: %APPDATA%/schooldesk
    Linux/Mac: ~/.schooldesk
    """
    if get_platform() == "windows":
        path = os.path.join(os.environ.get("APPDATA", os.path.expanduser("~")), PACKAGE)
    else:
        path = os.path.expanduser(f"~/.{PACKAGE}")

    if not os.path.exists(path):
        os.makedirs(path)

    return path
