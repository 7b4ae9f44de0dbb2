from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_session, json_body, login_required, to_json
from ..container import Container
from ..core.exceptions import NotFound


def register(app: Flask, container: Container) -> None:
    service = container.permit_service

    @app.route("/api/permits", methods=["POST"], endpoint="create_permit")
    @login_required
    def create_permit():
        data = json_body()
        permit = service.create(
            session=current_session(),
            permit_id=data.get("permit_id"),
            name=data.get("name"),
            location=data.get("location"),
            service_type=data.get("service_type"),
        )
        return jsonify({"success": True, "permit": to_json(permit)}), 201

    @app.route("/api/permits", methods=["GET"], endpoint="list_permits")
    @login_required
    def list_permits():
        return jsonify({"permits": to_json(service.list_all(session=current_session()))})

    @app.route("/api/permits/<int:permit_id>", methods=["GET"], endpoint="get_permit")
    @login_required
    def get_permit(permit_id: int):
        permit = service.get(session=current_session(), permit_id=permit_id)
        if permit is None:
            raise NotFound(f"Permit {permit_id} not found")
        return jsonify({"permit": to_json(permit)})

    @app.route("/api/permits/<int:permit_id>/pilgrims", methods=["POST"], endpoint="grant_permit")
    @login_required
    def grant_permit(permit_id: int):
        granted = service.grant(
            session=current_session(),
            pilgrim_id=json_body().get("pilgrim_id"),
            permit_id=permit_id,
        )
        return jsonify({"success": True, "assigned": granted})
