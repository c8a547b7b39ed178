from __future__ import annotations

from datetime import datetime, timezone

from flask import Flask, jsonify


def register(app: Flask) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()})
