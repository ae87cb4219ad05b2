from __future__ import annotations

from flask import Flask, jsonify

from ..auth.gate import current_identity, token_required
from ..common.datetime_utils import isoformat
from ..common.http import json_body
from ..container import Container
from .model import User


def user_json(user: User) -> dict:
    return {
        "email": user.email,
        "name": user.name,
        "userImageUri": user.user_image_uri,
        "companyName": user.company_name,
        "companyImageUri": user.company_image_uri,
        "createdAt": isoformat(user.created_at),
        "updatedAt": isoformat(user.updated_at),
    }


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.token_service)

    @app.route("/v1/user", methods=["GET"], endpoint="get_user")
    @login_required
    def get_user():
        identity = current_identity()
        user = container.profile_service.get_profile(identity=identity, user_id=identity.user_id)
        return jsonify(user_json(user))

    @app.route("/v1/user", methods=["PATCH"], endpoint="update_user")
    @login_required
    def update_user():
        identity = current_identity()
        user = container.profile_service.update_profile(
            identity=identity,
            user_id=identity.user_id,
            payload=json_body(),
        )
        return jsonify(user_json(user))
