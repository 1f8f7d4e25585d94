from gevent import monkey

monkey.patch_all()

import logging
import sys
from pathlib import Path

from flask import Flask, request, session
from flask_babel import Babel
from flask_socketio import SocketIO
from gevent.pywsgi import WSGIServer

from schooldesk.config import ConfigType
from schooldesk.constants import LANGUAGES, SITE_NAME
from schooldesk.dashboard import Dashboard
from schooldesk.lib.args import parse_schooldesk_args
from schooldesk.lib.logger import configure_logger
from schooldesk.routes.auth_routes import auth_bp
from schooldesk.routes.collections import collections_bp
from schooldesk.routes.home import home_bp
from schooldesk.routes.houses import houses_bp
from schooldesk.routes.notifications import notifications_bp
from schooldesk.routes.preferences import preferences_bp
from schooldesk.routes.socket_events import setup_socket_events


def get_locale():
    """Select the language to display the webpage in based on the Accept-Language header"""
    if request.args.get("lang"):
        session["lang"] = request.args.get("lang")
    if session.get("lang") in LANGUAGES:
        return session["lang"]
    return request.accept_languages.best_match(LANGUAGES.keys())


socketio = SocketIO(async_mode="gevent")
babel = Babel()


def create_app(dashboard: Dashboard, config: ConfigType = ConfigType.PRODUCTION) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config.value)
    app.json.sort_keys = False

    # The collection catch-all route goes last so fixed paths win
    app.register_blueprint(home_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(preferences_bp)
    app.register_blueprint(notifications_bp)
    app.register_blueprint(houses_bp)
    app.register_blueprint(collections_bp)

    babel.init_app(app, locale_selector=get_locale)

    # expose dashboard object to the flask app
    app.dashboard = dashboard
    return app


def main(argv=None):
    args = parse_schooldesk_args(argv)

    log_file = configure_logger(
        log_level=args.log_level, log_dir=Path(args.log_dir) if args.log_dir else None
    )
    logging.info(f"Logging to {log_file}")

    dashboard = Dashboard(
        api_url=args.api_url,
        api_timeout=args.api_timeout,
        api_token=args.api_token,
        config_file_path=args.config_file_path,
        hide_notifications=args.hide_notifications,
        toast_duration=args.toast_duration,
        socketio=socketio,
    )

    app = create_app(dashboard)
    app.config["ADMIN_PASSWORD"] = args.admin_password
    app.config["SITE_NAME"] = SITE_NAME

    socketio.init_app(app, cors_allowed_origins=args.url or "*")
    setup_socket_events(socketio)

    logging.info(f"Serving dashboard on port {args.port}, backend API at {args.api_url}")
    server = WSGIServer(("0.0.0.0", int(args.port)), app, log=None, error_log=logging.getLogger())
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logging.info("Shutting down")
    finally:
        server.stop()
    sys.exit()


if __name__ == "__main__":
    main()
