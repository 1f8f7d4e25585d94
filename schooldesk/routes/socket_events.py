"""Socket.IO event handlers for SchoolDesk."""

import logging

from flask_socketio import emit

from schooldesk.lib.current_app import get_dashboard_instance
from schooldesk.lib.entities import get_definition


def setup_socket_events(socketio):
    """Register Socket.IO event handlers.

    Args:
        socketio: The SocketIO instance.
    """

    @socketio.on("refresh_collection")
    def refresh_collection(entity: str) -> None:
        """Reload one entity's collection; the dashboard pushes collection_update to everyone.

        Args:
            entity: URL slug of the entity, e.g. 'grading-period'.
        """
        try:
            definition = get_definition(entity)
        except ValueError:
            logging.warning(f"refresh_collection for unknown entity: {entity}")
            emit("notification", {"title": "Error", "message": f"Unknown entity: {entity}", "variant": "error"})
            return
        get_dashboard_instance().refresh(definition.entity)

    @socketio.on("get_collection")
    def get_collection(entity: str) -> None:
        """Send the current rows of one collection back to the requesting client only."""
        try:
            definition = get_definition(entity)
        except ValueError:
            logging.warning(f"get_collection for unknown entity: {entity}")
            return
        page = get_dashboard_instance().get_page(definition.entity)
        emit("collection_update", {"entity": definition.entity.slug, "rows": page.rows()})
