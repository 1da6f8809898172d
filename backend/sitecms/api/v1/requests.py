# sitecms/api/v1/requests.py
import queue
from flask import g, jsonify, current_app
from sitecms.application.requests.submit_request import submit_request
from sitecms.application.requests.transition_request import transition_request
from sitecms.domain.invariants.text import required_text
from sitecms.normalizers.request import normalize_request
from sitecms.utils.decorators import store_required
from sitecms.utils.payload import json_object
from sitecms.utils.sse import event_stream_response
from . import v1_bp


@v1_bp.route("/requests", methods=["POST"])
@store_required
def create_service_request():
    data = json_object()

    submit_request(
        g.store,
        tenant_id=g.site_id,
        actor=g.current_actor,
        data=data,
        service_types=current_app.config["SERVICE_TYPES"],
    )

    return jsonify({
        "message": "Your request was sent successfully. We will get back to you soon."
    }), 201


@v1_bp.route("/requests", methods=["GET"])
@store_required
def list_service_requests():
    return jsonify({
        "site_id": g.site_id,
        "items": g.store.snapshot("requests", g.site_id),
    }), 200


@v1_bp.route("/requests/<request_id>/transition", methods=["POST"])
@store_required
def transition_service_request(request_id):
    data = json_object()

    service_request = transition_request(
        g.store,
        tenant_id=g.site_id,
        actor=g.current_actor,
        request_id=request_id,
        action=required_text(data, "action"),
    )

    return jsonify(normalize_request(service_request)), 200


@v1_bp.route("/requests/stream", methods=["GET"])
@store_required
def stream_service_requests():
    updates = queue.Queue()
    subscription = g.store.live.subscribe("requests", g.site_id, updates.put)

    return event_stream_response(
        updates,
        event="snapshot",
        keepalive=current_app.config["STREAM_KEEPALIVE_SECONDS"],
        release=subscription.close,
    )
