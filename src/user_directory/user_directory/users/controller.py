from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify, request

from ..common.validators import parse_positive_int
from ..core.constants import API_PREFIX, DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT, MAX_PAGE_OFFSET
from ..core.exceptions import BadInputError
from ..container import Container

# JSON attribute -> service field for PATCH bodies.
_UPDATE_FIELDS = {"email": "email", "isActive": "is_active", "employeeId": "employee_id"}


def _json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise BadInputError("Request body must be a JSON object.")
    return body


def _user_id(raw: str) -> int:
    return parse_positive_int(raw, "Invalid user ID format.")


def _page_params() -> tuple[int, int]:
    page = parse_positive_int(request.args.get("page", DEFAULT_PAGE), "page must be a positive integer.")
    limit = parse_positive_int(request.args.get("limit", DEFAULT_PAGE_LIMIT), "limit must be a positive integer.")
    if limit > MAX_PAGE_LIMIT:
        raise BadInputError(f"limit must not exceed {MAX_PAGE_LIMIT}.")
    if (page - 1) * limit > MAX_PAGE_OFFSET:
        raise BadInputError("page is out of range.")
    return page, limit


def register(app: Flask, container: Container) -> None:
    users = container.user_service

    @app.route(f"{API_PREFIX}/users", methods=["POST"], endpoint="create_user")
    def create_user():
        body = _json_body()
        username = body.get("username")
        password = body.get("password")
        if not username or not password:
            raise BadInputError("Username and password are required.")

        user = users.create_user(
            username=username,
            password=password,
            email=body.get("email"),
            employee_id=body.get("employeeId"),
            is_active=body.get("isActive", True),
        )
        return (
            jsonify({"status": "success", "message": "User created successfully.", "data": {"user": user.to_public_dict()}}),
            201,
        )

    @app.route(f"{API_PREFIX}/users", methods=["GET"], endpoint="list_users")
    def list_users():
        page, limit = _page_params()
        result = users.list_users(limit=limit, offset=(page - 1) * limit)
        return jsonify(
            {
                "status": "success",
                "message": "Users fetched successfully.",
                "results": len(result.users),
                "pagination": result.pagination.to_dict(),
                "data": {"users": [u.to_public_dict() for u in result.users]},
            }
        )

    @app.route(f"{API_PREFIX}/users/<user_id>", methods=["GET"], endpoint="get_user")
    def get_user(user_id: str):
        user = users.get_user_by_id(_user_id(user_id))
        return jsonify({"status": "success", "message": "User fetched successfully.", "data": {"user": user.to_public_dict()}})

    @app.route(f"{API_PREFIX}/users/<user_id>", methods=["PATCH"], endpoint="update_user")
    def update_user(user_id: str):
        uid = _user_id(user_id)
        body = _json_body()
        fields = {field: body[key] for key, field in _UPDATE_FIELDS.items() if key in body}
        if not fields:
            raise BadInputError("No valid fields provided for update.")

        user = users.update_user(uid, fields)
        return jsonify({"status": "success", "message": "User updated successfully.", "data": {"user": user.to_public_dict()}})

    @app.route(f"{API_PREFIX}/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    def delete_user(user_id: str):
        users.delete_user(_user_id(user_id))
        return Response(status=204)
