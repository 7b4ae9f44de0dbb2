from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_session, json_body, login_required, to_json
from ..container import Container
from ..core.exceptions import NotFound


def _pilgrim_fields(data: dict, *, default_age=None) -> dict:
    return {
        "name": data.get("name"),
        "phone": data.get("phone"),
        "nationality": data.get("nationality"),
        "special_need": data.get("special_need", ""),
        "allergies": data.get("allergies", ""),
        "age": data.get("age", default_age),
    }


def register(app: Flask, container: Container) -> None:
    service = container.pilgrim_service

    @app.route("/api/pilgrims", methods=["POST"], endpoint="register_pilgrim")
    def register_pilgrim():
        data = json_body()
        pilgrim = service.register(pilgrim_id=data.get("pilgrim_id"), **_pilgrim_fields(data, default_age=0))
        return jsonify({"success": True, "pilgrim": to_json(pilgrim)}), 201

    @app.route("/api/pilgrims", methods=["GET"], endpoint="list_pilgrims")
    @login_required
    def list_pilgrims():
        return jsonify({"pilgrims": to_json(service.list_all(session=current_session()))})

    @app.route("/api/pilgrims/<int:pilgrim_id>", methods=["GET"], endpoint="get_pilgrim")
    @login_required
    def get_pilgrim(pilgrim_id: int):
        pilgrim = service.get(session=current_session(), pilgrim_id=pilgrim_id)
        if pilgrim is None:
            raise NotFound(f"Pilgrim {pilgrim_id} not found")
        return jsonify({"pilgrim": to_json(pilgrim)})

    @app.route("/api/pilgrims/<int:pilgrim_id>", methods=["PUT"], endpoint="update_pilgrim")
    @login_required
    def update_pilgrim(pilgrim_id: int):
        pilgrim = service.update(session=current_session(), pilgrim_id=pilgrim_id, **_pilgrim_fields(json_body()))
        return jsonify({"success": True, "pilgrim": to_json(pilgrim)})

    @app.route("/api/pilgrims/<int:pilgrim_id>", methods=["DELETE"], endpoint="delete_pilgrim")
    @login_required
    def delete_pilgrim(pilgrim_id: int):
        service.delete(session=current_session(), pilgrim_id=pilgrim_id)
        return jsonify({"success": True})

    @app.route("/api/pilgrims/<int:pilgrim_id>/dashboard", endpoint="pilgrim_dashboard")
    @login_required
    def pilgrim_dashboard(pilgrim_id: int):
        return jsonify(to_json(service.dashboard(session=current_session(), pilgrim_id=pilgrim_id)))
