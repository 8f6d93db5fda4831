import logging

import matplotlib

matplotlib.use("Agg")

from flask import Flask, jsonify  # noqa: E402
from flask_cors import CORS  # noqa: E402

from backend.core.config import ENV, LOG_LEVEL  # noqa: E402
from backend.routes.animations import bp as animations_bp  # noqa: E402
from backend.routes.images import bp as images_bp  # noqa: E402
from backend.routes.playback import bp as playback_bp  # noqa: E402
from backend.routes.stats import bp as stats_bp  # noqa: E402


def _configure_logging() -> None:
    level = getattr(logging, LOG_LEVEL, logging.INFO)
    gunicorn_error = logging.getLogger("gunicorn.error")
    root = logging.getLogger()
    if gunicorn_error.handlers:
        root.handlers = gunicorn_error.handlers
        root.setLevel(level)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


_configure_logging()

app = Flask(__name__)
CORS(app)

# register routes
app.register_blueprint(stats_bp)
app.register_blueprint(images_bp)
app.register_blueprint(animations_bp)
app.register_blueprint(playback_bp)


@app.get("/health")
def health():
    return jsonify({"status": "ok", "env": ENV}), 200
