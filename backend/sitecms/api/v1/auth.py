import logging
import jwt as pyjwt
from flask import jsonify, g, current_app
from sitecms.auth.identity import Actor, issue_access_token
from sitecms.domain.invariants.text import required_text
from sitecms.models.user import User
from sitecms.utils.payload import json_object
from . import v1_bp

logger = logging.getLogger(__name__)


def _token_response(actor: Actor, status: int = 200):
    return jsonify({
        "access_token": issue_access_token(actor),
        "user_id": actor.user_id,
        "anonymous": actor.anonymous,
        "role": actor.role,
    }), status


@v1_bp.route("/auth/anonymous", methods=["POST"])
def sign_in_anonymously():
    actor = Actor.new_anonymous()
    logger.info("Anonymous identity %s issued", actor.user_id)
    return _token_response(actor, 201)


@v1_bp.route("/auth/token", methods=["POST"])
def sign_in_with_custom_token():
    """
    Exchange a custom token minted by a trusted backend (HS256, signed with
    CUSTOM_TOKEN_SECRET, carrying ``uid`` and optionally ``role``/``site_id``).
    """
    secret = current_app.config.get("CUSTOM_TOKEN_SECRET")
    if not secret:
        return jsonify({"error": "Custom token sign-in is not configured"}), 404

    data = json_object()
    token = required_text(data, "token")
    if not token:
        return jsonify({"error": "token is required"}), 400

    try:
        claims = pyjwt.decode(token, secret, algorithms=["HS256"])
    except pyjwt.InvalidTokenError as exc:
        logger.warning("Rejected custom token: %s", exc)
        return jsonify({"error": "Invalid custom token"}), 401

    if not claims.get("uid"):
        return jsonify({"error": "Custom token has no uid"}), 401

    actor = Actor(
        user_id=str(claims["uid"]),
        role=claims.get("role", "user"),
        anonymous=False,
        site_id=claims.get("site_id"),
    )
    return _token_response(actor)


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = json_object()
    email = required_text(data, "email")
    password = data.get("password")
    if password is not None and not isinstance(password, str):
        return jsonify({"error": "Password must be a string"}), 400

    if not email or not password:
        return jsonify({"error": "Email and password required"}), 400

    user = User.query.filter_by(
        email=email,
        tenant_id=g.site_id
    ).first()

    if not user or not user.check_password(password):
        return jsonify({"error": "Invalid credentials"}), 401

    if not user.is_active:
        return jsonify({"error": "User account disabled"}), 403

    actor = Actor(
        user_id=user.id,
        role=user.role,
        anonymous=False,
        site_id=user.tenant_id,
    )
    return _token_response(actor)
