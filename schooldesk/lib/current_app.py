from flask import current_app, request

from schooldesk.dashboard import Dashboard


def get_dashboard_instance() -> Dashboard:
    """Get the current app's Dashboard instance

    Returns:
        Dashboard: The Dashboard instance stored on the current app.
    """
    return current_app.dashboard


def get_admin_password() -> str | None:
    """Get the admin password from the current app's configuration, None when unset."""
    return current_app.config.get("ADMIN_PASSWORD")


def is_admin() -> bool:
    """Return True if no admin password is configured or the "admin" cookie matches it."""
    password = get_admin_password()
    return password is None or request.cookies.get("admin") == password


def get_site_name() -> str:
    return current_app.config["SITE_NAME"]
