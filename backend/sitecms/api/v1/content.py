# sitecms/api/v1/content.py
import queue
from flask import g, request, jsonify, current_app
from sitecms.application.cms.create_content import create_content
from sitecms.application.cms.delete_content import delete_content
from sitecms.application.cms.list_content import list_content
from sitecms.domain.exceptions import NotFound
from sitecms.normalizers.content import normalize_content
from sitecms.store.documents import CONTENT_COLLECTIONS
from sitecms.utils.decorators import store_required
from sitecms.utils.payload import json_object
from sitecms.utils.sse import event_stream_response
from . import v1_bp


def _content_collection(collection):
    if collection not in CONTENT_COLLECTIONS:
        raise NotFound(f"Unknown content collection: {collection}")
    return g.store.collection(collection)


@v1_bp.route("/content/<collection>", methods=["GET"])
@store_required
def list_collection(collection):
    spec = _content_collection(collection)
    return jsonify({
        "site_id": g.site_id,
        "items": list_content(g.store, tenant_id=g.site_id, kind=spec.fixed_fields["kind"]),
    }), 200


@v1_bp.route("/content/<collection>", methods=["POST"])
@store_required
def create_collection_item(collection):
    spec = _content_collection(collection)
    data = json_object()

    item = create_content(
        g.store,
        tenant_id=g.site_id,
        actor=g.current_actor,
        kind=spec.fixed_fields["kind"],
        data=data,
    )

    return jsonify({
        "item": normalize_content(item),
        "message": f"{item.title} was added successfully"
    }), 201


@v1_bp.route("/content/<collection>/<content_id>", methods=["DELETE"])
@store_required
def delete_collection_item(collection, content_id):
    _content_collection(collection)
    confirmed = request.args.get("confirm", "").lower() in ("1", "true", "yes")

    delete_content(
        g.store,
        tenant_id=g.site_id,
        actor=g.current_actor,
        collection=collection,
        content_id=content_id,
        confirmed=confirmed,
    )

    return jsonify({"message": "Content deleted"}), 200


@v1_bp.route("/content/<collection>/stream", methods=["GET"])
@store_required
def stream_collection(collection):
    _content_collection(collection)
    updates = queue.Queue()
    subscription = g.store.live.subscribe(collection, g.site_id, updates.put)

    return event_stream_response(
        updates,
        event="snapshot",
        keepalive=current_app.config["STREAM_KEEPALIVE_SECONDS"],
        release=subscription.close,
    )
