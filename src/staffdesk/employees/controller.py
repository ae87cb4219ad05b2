from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.gate import current_identity, token_required
from ..common.datetime_utils import isoformat
from ..common.http import json_body
from ..container import Container
from .model import Employee


def employee_json(employee: Employee) -> dict:
    return {
        "employeeId": employee.employee_id,
        "identityNumber": employee.identity_number,
        "name": employee.name,
        "employeeImageUri": employee.employee_image_uri,
        "gender": employee.gender.value,
        "departmentId": employee.department_id,
        "departmentName": employee.department_name,
        "createdAt": isoformat(employee.created_at),
        "updatedAt": isoformat(employee.updated_at),
    }


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.token_service)
    service = container.employee_service

    @app.route("/v1/employee", methods=["POST"], endpoint="create_employee")
    @login_required
    def create_employee():
        employee = service.create_employee(identity=current_identity(), payload=json_body())
        return jsonify(employee_json(employee)), 201

    @app.route("/v1/employee", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        page = service.list_employees(identity=current_identity(), params=request.args)
        return jsonify([employee_json(e) for e in page.items])

    @app.route("/v1/employee/<identity_number>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(identity_number: str):
        employee = service.get_employee(identity=current_identity(), identity_number=identity_number)
        return jsonify(employee_json(employee))

    @app.route("/v1/employee/<identity_number>", methods=["PATCH"], endpoint="update_employee")
    @login_required
    def update_employee(identity_number: str):
        employee = service.update_employee(
            identity=current_identity(),
            identity_number=identity_number,
            payload=json_body(),
        )
        return jsonify(employee_json(employee))

    @app.route("/v1/employee/<identity_number>", methods=["DELETE"], endpoint="delete_employee")
    @login_required
    def delete_employee(identity_number: str):
        service.delete_employee(identity=current_identity(), identity_number=identity_number)
        return jsonify({"message": "Employee deleted successfully"})
