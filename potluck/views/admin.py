from __future__ import annotations

from flask import Blueprint, jsonify
from flask.views import MethodView

from ..policies import json_body
from ..security import check_host_pin


admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")


class ValidatePinView(MethodView):
    """
    Lets a host UI unlock its controls. Always 200; the answer is in ``valid``.
    """
    def post(self):
        return jsonify({"valid": check_host_pin(json_body().get("pin"))})


admin_bp.add_url_rule("/validate", view_func=ValidatePinView.as_view("validate"), methods=["POST"])
