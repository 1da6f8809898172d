# sitecms/api/v1/site.py
import queue
from flask import g, request, jsonify, current_app
from sitecms.application.views import ViewRouter
from sitecms.utils.decorators import store_required
from sitecms.utils.sse import event_stream_response
from . import v1_bp


def _router_for_request(on_change=None):
    router = ViewRouter.from_query(
        g.store.live,
        request.args,
        default_site_id=current_app.config["DEFAULT_SITE_ID"],
        on_change=on_change,
    )
    # The middleware already resolved the site (query string or header)
    router.site_id = g.site_id
    return router


@v1_bp.route("/site", methods=["GET"])
@store_required
def site_view():
    with _router_for_request() as router:
        return jsonify(router.render()), 200


@v1_bp.route("/site/stream", methods=["GET"])
@store_required
def stream_site_view():
    updates = queue.Queue()
    router = _router_for_request(on_change=lambda current: updates.put(current.render()))
    router.open()

    return event_stream_response(
        updates,
        event="view",
        keepalive=current_app.config["STREAM_KEEPALIVE_SECONDS"],
        release=router.close,
    )
