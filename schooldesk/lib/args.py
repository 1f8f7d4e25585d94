import argparse
import logging

# Default values for CLI args
default_port = 5000
default_api_url = "http://localhost:8000/api"
default_api_timeout = 10
default_log_level = logging.INFO
default_config_file_path = "config.ini"
default_toast_duration = 3000


def parse_log_level(value):
    """Accept either a numeric level (20) or a name (INFO)."""
    if str(value).isdigit():
        return int(value)
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise argparse.ArgumentTypeError(f"Unknown log level: {value}")
    return level


def build_parser():
    parser = argparse.ArgumentParser(description="School management dashboard")

    parser.add_argument(
        "-p",
        "--port",
        help="Desired http port (default: %d)" % default_port,
        default=default_port,
        type=int,
        required=False,
    )
    parser.add_argument(
        "-a",
        "--api-url",
        help="Base URL of the school-management REST API (default: %s)" % default_api_url,
        default=default_api_url,
        required=False,
    )
    parser.add_argument(
        "--api-timeout",
        help="Seconds to wait for the REST API before giving up (default: %s)"
        % default_api_timeout,
        type=float,
        required=False,
    )
    parser.add_argument(
        "--api-token",
        help="Bearer token to start signed in with. Otherwise sign in from the web UI.",
        required=False,
    )
    parser.add_argument(
        "-l",
        "--log-level",
        help=f"Logging level, as an int or name (DEBUG: 10, INFO: 20, WARNING: 30, ERROR: 40). (default: {default_log_level} )",
        default=default_log_level,
        type=parse_log_level,
        required=False,
    )
    parser.add_argument(
        "--log-dir",
        help="Directory for log files (default: per-user log folder)",
        required=False,
    )
    parser.add_argument(
        "--config-file-path",
        help=f"Path to a config file to load preferences from. Relative paths live in the data directory. (default: {default_config_file_path})",
        default=default_config_file_path,
        required=False,
    )
    parser.add_argument(
        "--hide-notifications",
        help="Do not push toast notifications to connected browsers.",
        action="store_true",
        required=False,
    )
    parser.add_argument(
        "--toast-duration",
        help="How long toasts stay visible, in milliseconds (default: %s)"
        % default_toast_duration,
        type=int,
        required=False,
    )
    parser.add_argument(
        "-u",
        "--url",
        help="Origin allowed to open Socket.IO connections, e.g. https://school.example.com. Allows any origin if omitted.",
        required=False,
    )
    parser.add_argument(
        "--admin-password",
        help="Require this password before preferences can be changed from the web UI.",
        required=False,
    )
    return parser


def parse_schooldesk_args(argv=None):
    return build_parser().parse_args(argv)
