import logging

from flask import Blueprint, jsonify, request

from .. import db
from ..dependencies import get_user_service
from ..errors import ConstraintViolationError, DomainError, NotFoundError, ValidationError
from ..service import UserPayload

logger = logging.getLogger(__name__)

users_bp = Blueprint("users", __name__)


def _payload():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return UserPayload.from_json(data)


def _not_found(message="User not found"):
    return jsonify({"error": message}), 404


@users_bp.get("")
def list_users():
    users = get_user_service().get_all()
    return jsonify([u.to_dict() for u in users])


@users_bp.get("/<int:user_id>")
def get_user(user_id):
    user = get_user_service().get_by_id(user_id)
    if user is None:
        return _not_found()
    return jsonify(user.to_dict())


@users_bp.post("")
def create_user():
    try:
        user = get_user_service().create(_payload())
    except DomainError as e:
        logger.info("User creation rejected", extra={"reason": type(e).__name__})
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        # registration answers 400 for every failure, store errors included
        db.session.rollback()
        logger.exception("User creation failed", extra={"reason": type(e).__name__})
        return jsonify({"error": "User could not be created"}), 400
    logger.info("User created", extra={"userId": user.id})
    return jsonify(user.to_dict()), 201


@users_bp.put("/<int:user_id>")
def update_user(user_id):
    try:
        user = get_user_service().update(user_id, _payload())
    except NotFoundError as e:
        return _not_found(str(e))
    except ConstraintViolationError as e:
        return jsonify({"error": str(e)}), 409
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(user.to_dict())


@users_bp.delete("/<int:user_id>")
def delete_user(user_id):
    try:
        get_user_service().delete(user_id)
    except NotFoundError as e:
        return _not_found(str(e))
    return "", 204


@users_bp.get("/search")
def search_users():
    users = get_user_service().search(
        first_name=request.args.get("firstName"),
        last_name=request.args.get("lastName"),
    )
    return jsonify([u.to_dict() for u in users])


@users_bp.get("/email/<email>")
def get_user_by_email(email):
    user = get_user_service().get_by_email(email)
    if user is None:
        return _not_found()
    return jsonify(user.to_dict())


@users_bp.get("/count")
def count_users():
    first_name = request.args.get("firstName")
    if first_name is not None:
        return jsonify(get_user_service().count_by_first_name(first_name))
    return jsonify(get_user_service().count())
