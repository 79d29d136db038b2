"""JSON views that hand the formatting model to a host.

The endpoint is stateless: every request builds a fresh model, applies the
host's stored property values, reconciles the data-color card against the
posted category rows, and returns the encoded card list.
"""

from __future__ import annotations

import json
import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponseNotAllowed, JsonResponse

from formatting.codec import apply_object_values, decode_data_points, encode_settings_model
from formatting.model import SettingsModel

logger = logging.getLogger(__name__)


def formatting_model(request: HttpRequest) -> JsonResponse | HttpResponseNotAllowed:
    """Return the encoded formatting model.

    GET returns the default model. POST accepts a JSON body of the form
    `{"dataPoints": [...], "objects": {...}}`; both keys are optional.
    """

    if request.method == "GET":
        return JsonResponse(encode_settings_model(SettingsModel()))
    if request.method != "POST":
        return HttpResponseNotAllowed(["GET", "POST"])

    try:
        body = json.loads(request.body or b"{}")
    except (UnicodeDecodeError, json.JSONDecodeError):
        return JsonResponse({"error": "Request body must be valid JSON."}, status=400)
    if not isinstance(body, dict):
        return JsonResponse({"error": "Request body must be a JSON object."}, status=400)

    model = SettingsModel()
    try:
        apply_object_values(model, body.get("objects"))
        data_points = decode_data_points(
            body.get("dataPoints"),
            query_name=settings.FORMATTING_CATEGORY_QUERY_NAME,
        )
    except ValueError as exc:
        logger.info("Rejected formatting model request: %s", exc)
        return JsonResponse({"error": str(exc)}, status=400)

    model.populate_color_selector(data_points)
    return JsonResponse(encode_settings_model(model))
