from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask.views import MethodView

from ..errors import InvalidRequest, NotFound
from ..extensions import db
from ..models import Item, Rsvp
from ..policies import json_body
from ..services.event import get_config, update_config


public_bp = Blueprint("public", __name__, url_prefix="/api")


def _text(data: dict, key: str, required: bool = False) -> str | None:
    value = data.get(key)
    if value is None:
        if required:
            raise InvalidRequest(f"{key} is required.")
        return None
    if not isinstance(value, str):
        raise InvalidRequest(f"{key} must be a string.")
    value = value.strip()
    if required and not value:
        raise InvalidRequest(f"{key} is required.")
    return value or None


def _get_item_or_404(item_id: int) -> Item:
    item = db.session.get(Item, item_id)
    if item is None:
        raise NotFound("Item not found")
    return item


class ConfigView(MethodView):
    def get(self):
        return jsonify(get_config().to_dict())

    def patch(self):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise InvalidRequest()
        return jsonify(update_config(data).to_dict())


class ItemsView(MethodView):
    def get(self):
        return jsonify([i.to_dict() for i in Item.query.order_by(Item.id.asc()).all()])

    def post(self):
        data = json_body()
        item = Item(name=_text(data, "name", required=True), assignee=_text(data, "assignee"))
        db.session.add(item)
        db.session.commit()
        current_app.logger.info("Item added: %s", item.name)
        return jsonify(item.to_dict()), 201


class ItemView(MethodView):
    def delete(self, item_id: int):
        item = _get_item_or_404(item_id)
        Rsvp.query.filter_by(item_id=item.id).update({"item_id": None}, synchronize_session=False)
        db.session.delete(item)
        db.session.commit()
        current_app.logger.info("Item removed: %s", item_id)
        return "", 204


class ItemAssigneeView(MethodView):
    """
    Claim a dish (assignee = name) or release it (null / empty string).
    """
    def patch(self, item_id: int):
        item = _get_item_or_404(item_id)
        item.assignee = _text(json_body(), "assignee")
        db.session.commit()
        return jsonify(item.to_dict())


class RsvpsView(MethodView):
    def get(self):
        return jsonify([r.to_dict() for r in Rsvp.query.order_by(Rsvp.id.asc()).all()])

    def post(self):
        data = json_body()
        first_name = _text(data, "firstName", required=True)

        attending = data.get("attending")
        if not isinstance(attending, bool):
            raise InvalidRequest("attending must be true or false.")
        plus_one = data.get("plusOne", False)
        if not isinstance(plus_one, bool):
            raise InvalidRequest("plusOne must be true or false.")

        item_id = data.get("itemId")
        item = None
        if item_id is not None:
            if isinstance(item_id, bool) or not isinstance(item_id, int):
                raise InvalidRequest("itemId must be an integer.")
            item = db.session.get(Item, item_id)
            if item is None:
                raise InvalidRequest("itemId does not match any item.")

        rsvp = Rsvp(
            first_name=first_name,
            attending=attending,
            plus_one=plus_one,
            note=_text(data, "note"),
            item_id=item_id,
        )
        db.session.add(rsvp)
        # Bringing a dish claims it in the same commit.
        if item is not None:
            item.assignee = first_name
        db.session.commit()

        current_app.logger.info(
            "RSVP from %s (%s)", first_name, "attending" if attending else "not attending"
        )
        return jsonify(rsvp.to_dict()), 201


public_bp.add_url_rule("/config", view_func=ConfigView.as_view("config"), methods=["GET", "PATCH"])
public_bp.add_url_rule("/items", view_func=ItemsView.as_view("items"), methods=["GET", "POST"])
public_bp.add_url_rule("/items/<int:item_id>", view_func=ItemView.as_view("item"), methods=["DELETE"])
public_bp.add_url_rule(
    "/items/<int:item_id>/assignee",
    view_func=ItemAssigneeView.as_view("item_assignee"),
    methods=["PATCH"],
)
public_bp.add_url_rule("/rsvps", view_func=RsvpsView.as_view("rsvps"), methods=["GET", "POST"])
