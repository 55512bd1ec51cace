import os
import re
import json
import logging
from uuid import uuid4
from html import escape as escape_html

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET

from api.roadmap_api.model import StateFormatError
from core.roadmap_platform.actions import action_from_dict
from core.roadmap_platform.engine import EXPORT_FILENAME, MapEngine
from storage_json.storage_json_plugin.plugin import JsonStoragePlugin
from visualizer_svg.visualizer_svg_plugin.plugin import SvgVisualizer

from .inputs import RequestInput

ENGINES: dict[str, MapEngine] = {}
LOGGER = logging.getLogger(__name__)

MAP_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def json_error(
    status_code: int,
    error: str,
    message: str,
    expected: dict[str, object] | None = None,
    details: object | None = None,
) -> JsonResponse:
    payload: dict[str, object] = {
        "ok": False,
        "status": status_code,
        "error": error,
        "message": message,
    }
    if expected is not None:
        payload["expected"] = expected
    if details is not None:
        payload["details"] = details
    return JsonResponse(payload, status=status_code)


def _parse_json_body(request: HttpRequest, allow_empty: bool = False) -> tuple[object | None, JsonResponse | None]:
    if not request.body:
        if allow_empty:
            return {}, None
        return None, json_error(400, "BadRequest", "Invalid JSON body.")

    try:
        body = request.body.decode("utf-8")
        return json.loads(body), None
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None, json_error(400, "BadRequest", "Invalid JSON body.")


def _require_post_json(request: HttpRequest) -> JsonResponse | None:
    if request.method != "POST":
        return json_error(
            405,
            "MethodNotAllowed",
            "Only POST is allowed.",
            details={"allowed_methods": ["POST"]},
        )
    return None


def _html_response(title: str, message: str, status: int = 200) -> HttpResponse:
    page = [
        "<!doctype html>",
        "<html lang=\"en\">",
        "<head><meta charset=\"utf-8\"><title>{}</title></head>".format(escape_html(title)),
        "<body>",
        "<h1 style=\"font-family:sans-serif;font-size:1.1rem;\">{}</h1>".format(escape_html(title)),
        "<p style=\"font-family:sans-serif;\">{}</p>".format(escape_html(message)),
        "</body>",
        "</html>",
    ]
    return HttpResponse("\n".join(page), status=status, content_type="text/html; charset=utf-8")


def _build_storage(map_id: str) -> JsonStoragePlugin | None:
    storage_dir = getattr(settings, "ROADMAP_STORAGE_DIR", None)
    if not storage_dir:
        return None
    return JsonStoragePlugin(os.path.join(str(storage_dir), f"{map_id}.json"))


def _build_engine(map_id: str) -> MapEngine:
    return MapEngine(storage=_build_storage(map_id), renderer=SvgVisualizer())


def _state_payload(map_id: str, engine: MapEngine, **extra: object) -> dict[str, object]:
    payload: dict[str, object] = {"ok": True, "map_id": map_id}
    payload.update(engine.state())
    payload.update(extra)
    return payload


def _get_engine(map_id: str) -> tuple[MapEngine | None, JsonResponse | None]:
    engine = ENGINES.get(map_id)
    if engine is None:
        return None, json_error(404, "NotFound", f"Map '{map_id}' was not found.")
    return engine, None


def index(request: HttpRequest) -> HttpResponse:
    return _html_response(
        "City Road Map",
        "Create a map with POST api/map/new/ and open api/map/<id>/render/ to view it.",
    )


@csrf_exempt
def new_map_api(request: HttpRequest) -> JsonResponse:
    method_error = _require_post_json(request)
    if method_error:
        return method_error

    body, error_response = _parse_json_body(request, allow_empty=True)
    if error_response:
        return error_response
    if not isinstance(body, dict):
        return json_error(400, "BadRequest", "Body must be a JSON object.")

    map_id = body.get("map_id") or str(uuid4())
    if not isinstance(map_id, str) or not MAP_ID_PATTERN.match(map_id):
        return json_error(
            400,
            "BadRequest",
            "Invalid map_id.",
            expected={"map_id": "letters, digits, '-' or '_' (max 64)"},
        )

    engine = ENGINES.get(map_id)
    restored = False
    if engine is None:
        engine = _build_engine(map_id)
        restored = engine.boot()
        ENGINES[map_id] = engine

    return JsonResponse(_state_payload(map_id, engine, restored=restored))


@csrf_exempt
def import_map_api(request: HttpRequest) -> JsonResponse:
    method_error = _require_post_json(request)
    if method_error:
        return method_error

    uploaded_file = request.FILES.get("file")
    if uploaded_file is None:
        return json_error(400, "BadRequest", "missing file")

    filename = str(uploaded_file.name or "uploaded-file")
    try:
        record = json.loads(uploaded_file.read().decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        return json_error(400, "BadRequest", f"Failed to parse '{filename}' as JSON: {exc}")

    map_id = str(uuid4())
    engine = _build_engine(map_id)
    try:
        engine.import_record(record)
    except StateFormatError as exc:
        return json_error(400, "InvalidMap", f"'{filename}' is not a valid road map: {exc}")

    ENGINES[map_id] = engine
    return JsonResponse(_state_payload(map_id, engine, meta={"filename": filename}))


@require_GET
def map_state_api(request: HttpRequest, map_id: str) -> JsonResponse:
    engine, error_response = _get_engine(map_id)
    if error_response:
        return error_response
    return JsonResponse(_state_payload(map_id, engine))


@csrf_exempt
def map_action_api(request: HttpRequest, map_id: str) -> JsonResponse:
    method_error = _require_post_json(request)
    if method_error:
        return method_error

    engine, error_response = _get_engine(map_id)
    if error_response:
        return error_response

    body, error_response = _parse_json_body(request)
    if error_response:
        return error_response
    if not isinstance(body, dict):
        return json_error(400, "BadRequest", "Body must be a JSON object.")

    answers = body.get("answers", [])
    if not isinstance(answers, list):
        return json_error(400, "BadRequest", "'answers' must be a list.")

    try:
        action = action_from_dict(body.get("action"))
    except ValueError as exc:
        return json_error(
            400,
            "InvalidAction",
            str(exc),
            expected={"action": {"type": "string", "...": "action fields"}},
        )

    user_input = RequestInput(answers=answers, confirmed=bool(body.get("confirm", False)))
    try:
        engine.dispatch(action, input_plugin=user_input)
    except Exception as exc:
        LOGGER.exception("Unexpected failure while running %r.", action)
        return json_error(500, "InternalError", f"Unexpected failure: {exc}")

    return JsonResponse(_state_payload(map_id, engine, alerts=user_input.alerts))


@require_GET
def export_map_api(request: HttpRequest, map_id: str) -> HttpResponse:
    engine, error_response = _get_engine(map_id)
    if error_response:
        return error_response

    response = HttpResponse(engine.export_json(), content_type="application/json")
    response["Content-Disposition"] = f'attachment; filename="{EXPORT_FILENAME}"'
    return response


@require_GET
def render_map_api(request: HttpRequest, map_id: str) -> HttpResponse:
    engine = ENGINES.get(map_id)
    if engine is None:
        return _html_response(
            "Map Not Found",
            f"Map '{map_id}' was not found in the active map store.",
            status=404,
        )

    engine.editor.render()
    return HttpResponse(str(engine.editor.last_frame), content_type="text/html; charset=utf-8")
