"""
project: Minecrawl
module: __init__.py
License: MIT

Flask application factory.

Wires the room API blueprint into a Flask app. Configuration is sourced from
environment variables with development defaults; a local `instance/`
directory holds runtime files such as the server log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so `SECRET_KEY` and `ROOM_*` tunables can be supplied
# without exporting shell variables during development.
load_dotenv()

# Instance-relative config so ./instance holds the log file
app = Flask(__name__, instance_relative_config=True)

try:
    os.makedirs(app.instance_path, exist_ok=True)
except OSError:
    # Read-only checkouts still serve requests; only file logging is lost
    pass

app.config.update(
    SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
    ROOM_SESSION_MAX=int(os.getenv("ROOM_SESSION_MAX", "64")),
)

from minecrawl.routes.room_api import bp_room  # noqa: E402

app.register_blueprint(bp_room)


def create_app():
    """Return the configured Flask app instance."""
    return app


@app.errorhandler(500)
def internal_error(e):
    error_id = uuid.uuid4().hex[:8]
    logging.exception("Unhandled exception (id=%s)", error_id)
    return jsonify({"error": "internal error", "error_id": error_id}), 500
