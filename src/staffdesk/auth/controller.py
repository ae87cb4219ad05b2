from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/v1/auth", methods=["POST"], endpoint="auth")
    def auth():
        result = container.auth_service.authenticate(json_body())
        return jsonify({"email": result.email, "token": result.token}), (201 if result.created else 200)
