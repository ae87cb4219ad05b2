from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.gate import current_identity, token_required
from ..common.datetime_utils import isoformat
from ..common.http import json_body
from ..container import Container
from .model import Department


def department_json(department: Department) -> dict:
    return {
        "departmentId": department.department_id,
        "name": department.name,
        "createdAt": isoformat(department.created_at),
        "updatedAt": isoformat(department.updated_at),
    }


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.token_service)
    service = container.department_service

    @app.route("/v1/department", methods=["POST"], endpoint="create_department")
    @login_required
    def create_department():
        department = service.create_department(identity=current_identity(), payload=json_body())
        return jsonify(department_json(department)), 201

    @app.route("/v1/department", methods=["GET"], endpoint="list_departments")
    @login_required
    def list_departments():
        page = service.list_departments(identity=current_identity(), params=request.args)
        return jsonify([department_json(d) for d in page.items])

    @app.route("/v1/department/<department_id>", methods=["GET"], endpoint="get_department")
    @login_required
    def get_department(department_id: str):
        department = service.get_department(identity=current_identity(), department_id=department_id)
        return jsonify(department_json(department))

    @app.route("/v1/department/<department_id>", methods=["PATCH"], endpoint="update_department")
    @login_required
    def update_department(department_id: str):
        department = service.update_department(
            identity=current_identity(),
            department_id=department_id,
            payload=json_body(),
        )
        return jsonify(department_json(department))

    @app.route("/v1/department/<department_id>", methods=["DELETE"], endpoint="delete_department")
    @login_required
    def delete_department(department_id: str):
        service.delete_department(identity=current_identity(), department_id=department_id)
        return jsonify({"message": "Department deleted successfully"})
