from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_session, json_body, login_required, to_json
from ..container import Container
from ..core.exceptions import NotFound


def register(app: Flask, container: Container) -> None:
    service = container.transport_service

    @app.route("/api/transport", methods=["POST"], endpoint="create_transport")
    @login_required
    def create_transport():
        data = json_body()
        schedule = service.create(
            session=current_session(),
            schedule_id=data.get("schedule_id"),
            departure_time=data.get("departure_time"),
            arrival_time=data.get("arrival_time"),
            route=data.get("route"),
            transport_type=data.get("transport_type"),
        )
        return jsonify({"success": True, "schedule": to_json(schedule)}), 201

    @app.route("/api/transport", methods=["GET"], endpoint="list_transport")
    @login_required
    def list_transport():
        return jsonify({"schedules": to_json(service.list_all(session=current_session()))})

    @app.route("/api/transport/<int:schedule_id>", methods=["GET"], endpoint="get_transport")
    @login_required
    def get_transport(schedule_id: int):
        schedule = service.get(session=current_session(), schedule_id=schedule_id)
        if schedule is None:
            raise NotFound(f"Transport schedule {schedule_id} not found")
        return jsonify({"schedule": to_json(schedule)})

    @app.route("/api/transport/<int:schedule_id>/pilgrims", methods=["POST"], endpoint="assign_transport")
    @login_required
    def assign_transport(schedule_id: int):
        assigned = service.assign(
            session=current_session(),
            pilgrim_id=json_body().get("pilgrim_id"),
            schedule_id=schedule_id,
        )
        return jsonify({"success": True, "assigned": assigned})
