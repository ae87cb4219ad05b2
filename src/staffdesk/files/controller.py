from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.gate import current_identity, token_required
from ..common.datetime_utils import isoformat
from ..core.exceptions import ValidationError
from ..container import Container
from .model import StoredFile


def file_json(stored: StoredFile) -> dict:
    return {
        "fileId": stored.file_id,
        "uri": stored.uri,
        "contentType": stored.content_type,
        "sizeBytes": stored.size_bytes,
        "createdAt": isoformat(stored.created_at),
    }


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.token_service)
    service = container.file_service

    @app.route("/v1/file", methods=["POST"], endpoint="upload_file")
    @login_required
    def upload_file():
        identity = current_identity()
        if request.files:
            upload = request.files.get("file")
            if upload is None:
                raise ValidationError("Invalid field name: expected 'file'")
            data = upload.read(service.max_bytes + 1)
        else:
            data = request.get_data(cache=False)

        stored = service.upload(identity=identity, owner_id=identity.user_id, data=data)
        return jsonify({"uri": stored.uri, "fileId": stored.file_id})

    @app.route("/v1/file", methods=["GET"], endpoint="list_files")
    @login_required
    def list_files():
        identity = current_identity()
        page = service.list_files(identity=identity, owner_id=identity.user_id, params=request.args)
        return jsonify([file_json(f) for f in page.items])
