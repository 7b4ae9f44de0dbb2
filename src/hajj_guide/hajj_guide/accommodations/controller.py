from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_session, json_body, login_required, to_json
from ..container import Container
from ..core.exceptions import NotFound


def register(app: Flask, container: Container) -> None:
    service = container.accommodation_service

    @app.route("/api/accommodations", methods=["POST"], endpoint="create_accommodation")
    @login_required
    def create_accommodation():
        data = json_body()
        accommodation = service.create(
            session=current_session(),
            accommodation_id=data.get("accommodation_id"),
            hotel_name=data.get("hotel_name"),
            room_type=data.get("room_type"),
            capacity=data.get("capacity"),
            address=data.get("address"),
        )
        return jsonify({"success": True, "accommodation": to_json(accommodation)}), 201

    @app.route("/api/accommodations", methods=["GET"], endpoint="list_accommodations")
    @login_required
    def list_accommodations():
        return jsonify({"accommodations": to_json(service.list_all(session=current_session()))})

    @app.route("/api/accommodations/<int:accommodation_id>", methods=["GET"], endpoint="get_accommodation")
    @login_required
    def get_accommodation(accommodation_id: int):
        accommodation = service.get(session=current_session(), accommodation_id=accommodation_id)
        if accommodation is None:
            raise NotFound(f"Accommodation {accommodation_id} not found")
        return jsonify({"accommodation": to_json(accommodation)})

    @app.route("/api/accommodations/<int:accommodation_id>/pilgrims", methods=["POST"], endpoint="assign_accommodation")
    @login_required
    def assign_accommodation(accommodation_id: int):
        assigned = service.assign(
            session=current_session(),
            pilgrim_id=json_body().get("pilgrim_id"),
            accommodation_id=accommodation_id,
        )
        return jsonify({"success": True, "assigned": assigned})
