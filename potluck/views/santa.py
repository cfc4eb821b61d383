from __future__ import annotations

from flask import Blueprint, jsonify

from ..policies import HostSecretSantaMixin, SecretSantaEnabledMixin, json_body
from ..services.secret_santa import get_match, join, list_participants, perform_draw, reset_draw

santa_bp = Blueprint("santa", __name__, url_prefix="/api/secret-santa")


class ParticipantsView(SecretSantaEnabledMixin):
    def get(self):
        return jsonify([p.to_dict() for p in list_participants()])


class JoinView(SecretSantaEnabledMixin):
    def post(self):
        data = json_body()
        p = join(data.get("name"), data.get("preferences"))
        return jsonify(p.to_dict()), 201


class MyMatchView(SecretSantaEnabledMixin):
    def get(self, name: str):
        return jsonify(get_match(name))


class DrawView(HostSecretSantaMixin):
    def post(self):
        count = perform_draw()
        return jsonify({
            "success": True,
            "message": f"Secret Santa draw completed for {count} participants.",
        })


class ResetView(HostSecretSantaMixin):
    def post(self):
        reset_draw()
        return jsonify({"success": True, "message": "Secret Santa draw has been reset."})


# Register routes
santa_bp.add_url_rule("/participants", view_func=ParticipantsView.as_view("participants"))
santa_bp.add_url_rule("/join", view_func=JoinView.as_view("join"), methods=["POST"])
santa_bp.add_url_rule("/my-match/<path:name>", view_func=MyMatchView.as_view("my_match"))
santa_bp.add_url_rule("/draw", view_func=DrawView.as_view("draw"), methods=["POST"])
santa_bp.add_url_rule("/reset", view_func=ResetView.as_view("reset"), methods=["POST"])
