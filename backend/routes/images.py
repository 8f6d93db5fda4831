import base64
import logging
from io import BytesIO

import matplotlib.pyplot as plt
import requests
from flask import Blueprint, jsonify, request

from backend.services.system import log_mem
from backend.services.visuals import (
    animator_config_from,
    plot_brand_shares_wrapper,
    plot_choropleth_wrapper,
    plot_final_frame_wrapper,
)
from carstats.data.normalize_inputs import normalize_inputs

logger = logging.getLogger(__name__)

bp = Blueprint("images", __name__)


@bp.route("/generate_image", methods=["POST"])
def generate_image():
    """Generate a static chart image.

    Args:
        None. Reads JSON body with key ``chart`` ("choropleth", "brands" or
        "final_frame", or their UI labels) plus animator options for the
        final frame (``top_n``, ``limit_bar_stretch``, ...).

    Returns:
        flask.Response: JSON with Base64-encoded ``image`` and ``filename``.
        400 on an unknown chart or bad option, 502 when map geometry cannot
        be fetched, 500 on other failures.
    """
    try:
        log_mem("Start /generate_image")
        data = request.get_json(silent=True) or {}
        chart = normalize_inputs(data.get("chart", "choropleth"))

        plt.close("all")
        if chart == "choropleth":
            fig = plot_choropleth_wrapper()
        elif chart == "brands":
            fig = plot_brand_shares_wrapper()
        elif chart == "final_frame":
            fig = plot_final_frame_wrapper(animator_config_from(data))
            if fig is None:
                return jsonify({"error": "No data to plot."}), 400
        else:
            return jsonify({"error": f"Unknown chart: {chart}"}), 400
        log_mem(f"After plot {chart}")

        buf = BytesIO()
        fig.savefig(buf, format="jpeg", dpi=91, facecolor="#F0F0F0", edgecolor="none")
        buf.seek(0)
        image_base64 = base64.b64encode(buf.getvalue()).decode("utf-8")
        plt.close(fig)
        filename = f"{chart}_visual.jpg"
        return jsonify({"image": image_base64, "filename": filename}), 200

    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except requests.RequestException as e:
        logger.warning("map geometry unavailable: %s", e)
        return jsonify({"error": f"Map geometry unavailable: {str(e)}"}), 502
    except Exception as e:
        logger.exception("image generation failed")
        return jsonify({"error": f"Image generation failed: {str(e)}"}), 500
