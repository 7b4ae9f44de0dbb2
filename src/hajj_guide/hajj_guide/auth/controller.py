from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import clear_session, current_session, json_body, login_required, store_session, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login/admin", methods=["POST"], endpoint="login_admin")
    def login_admin():
        data = json_body()
        s = container.auth_service.login_admin(data.get("admin_id"), data.get("password", ""))
        store_session(s)
        return jsonify({"success": True, "session": s.to_dict()})

    @app.route("/api/login/pilgrim", methods=["POST"], endpoint="login_pilgrim")
    def login_pilgrim():
        data = json_body()
        s = container.auth_service.login_pilgrim(data.get("pilgrim_id"))
        store_session(s)
        return jsonify({"success": True, "session": s.to_dict()})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        clear_session()
        return jsonify({"success": True})

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        s = current_session()
        admin = container.auth_service.current_admin(s)
        return jsonify({"session": s.to_dict(), "admin": to_json(admin) if admin else None})
