from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_session, json_body, login_required, to_json
from ..container import Container
from ..core.exceptions import NotFound


def register(app: Flask, container: Container) -> None:
    service = container.medical_service

    @app.route("/api/medical-profiles", methods=["POST"], endpoint="create_medical_profile")
    @login_required
    def create_medical_profile():
        data = json_body()
        profile = service.create(
            session=current_session(),
            profile_id=data.get("profile_id"),
            blood_type=data.get("blood_type"),
            medications=data.get("medications"),
            medical_history=data.get("medical_history"),
            pilgrim_id=data.get("pilgrim_id"),
        )
        return jsonify({"success": True, "profile": to_json(profile)}), 201

    @app.route("/api/medical-profiles/<int:profile_id>", methods=["PUT"], endpoint="update_medical_profile")
    @login_required
    def update_medical_profile(profile_id: int):
        data = json_body()
        service.update(
            session=current_session(),
            profile_id=profile_id,
            blood_type=data.get("blood_type"),
            medications=data.get("medications"),
            medical_history=data.get("medical_history"),
        )
        return jsonify({"success": True})

    @app.route("/api/pilgrims/<int:pilgrim_id>/medical-profile", endpoint="pilgrim_medical_profile")
    @login_required
    def pilgrim_medical_profile(pilgrim_id: int):
        profile = service.get_for_pilgrim(session=current_session(), pilgrim_id=pilgrim_id)
        if profile is None:
            raise NotFound(f"No medical profile for pilgrim {pilgrim_id}")
        return jsonify({"profile": to_json(profile)})
