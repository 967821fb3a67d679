"""
Projection blueprint for rent-versus-buy comparisons.

This module provides API endpoints that run a projection for a scenario
given either as shareable query parameters or as a JSON body, and that
encode a scenario into its shareable form.
"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from rent_vs_buy.models.exceptions import ProjectionError
from rent_vs_buy.services.projection_service import ProjectionService
from rent_vs_buy.services.url_state import decode_scenario, encode_scenario, share_path

projections_bp = Blueprint("projections", __name__, url_prefix="/api")


def _service() -> ProjectionService:
    return current_app.extensions["projection_service"]


def _error_response(error: ProjectionError) -> Any:
    return jsonify(error.to_dict()), error.status_code


@projections_bp.route("/projections", methods=["GET"])
def get_projection() -> Any:
    """Run a projection for a scenario encoded in the query string.

    Returns:
        JSON response with summary, yearly projections and warnings
    """
    try:
        service = _service()
        params = decode_scenario(request.args)
        result = service.run(params)
        return jsonify(service.build_response(result)), 200

    except ProjectionError as e:
        return _error_response(e)
    except Exception as e:
        current_app.logger.error(f"Error running projection: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@projections_bp.route("/projections", methods=["POST"])
def create_projection() -> Any:
    """Run a projection for scenario fields given in a JSON body.

    Fields not present in the body keep their default values.

    Returns:
        JSON response with summary, yearly projections and warnings
    """
    try:
        data = request.get_json(silent=True)
        if data is not None and not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        service = _service()
        params = service.parameters_from_payload(data)
        result = service.run(params)
        return jsonify(service.build_response(result)), 200

    except ProjectionError as e:
        return _error_response(e)
    except Exception as e:
        current_app.logger.error(f"Error running projection: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500


@projections_bp.route("/scenarios/share", methods=["POST"])
def share_scenario() -> Any:
    """Encode a scenario as a bookmarkable query string.

    Returns:
        JSON response with the query string and a shareable path
    """
    try:
        data = request.get_json(silent=True)
        if data is not None and not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        params = _service().parameters_from_payload(data)
        return (
            jsonify(
                {
                    "query": encode_scenario(params),
                    "path": share_path("/", params),
                }
            ),
            200,
        )

    except ProjectionError as e:
        return _error_response(e)
    except Exception as e:
        current_app.logger.error(f"Error sharing scenario: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500
