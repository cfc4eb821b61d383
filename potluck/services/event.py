from __future__ import annotations

from datetime import datetime

from flask import current_app

from ..errors import InvalidRequest
from ..extensions import db
from ..models import EventConfig


# camelCase field -> (column attribute, accepted type, nullable)
EDITABLE_FIELDS = {
    "title": ("title", str, False),
    "description": ("description", str, False),
    "date": ("date", str, False),
    "time": ("time", str, False),
    "location": ("location", str, False),
    "backgroundImageUrl": ("background_image_url", str, True),
    "themeColor": ("theme_color", str, True),
    "fontStyle": ("font_style", str, True),
    "confirmationMessage": ("confirmation_message", str, True),
    "secretSantaEnabled": ("secret_santa_enabled", bool, False),
    "secretSantaGiftLimit": ("secret_santa_gift_limit", int, False),
}


def _coerce(field: str, value, expected: type, nullable: bool):
    if value is None:
        if nullable:
            return None
        raise InvalidRequest(f"{field} cannot be null.")

    # bool is an int subclass; keep them apart.
    if expected is int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidRequest(f"{field} must be a non-negative integer.")
        return value
    if not isinstance(value, expected):
        raise InvalidRequest(f"{field} must be a {expected.__name__}.")
    return value


def get_config() -> EventConfig:
    return EventConfig.get_singleton()


def update_config(updates) -> EventConfig:
    """
    Apply a partial update. The whole payload is validated before anything is
    written, so a bad field leaves the stored config untouched.
    """
    if not isinstance(updates, dict):
        raise InvalidRequest()

    unknown = set(updates) - set(EDITABLE_FIELDS)
    if unknown:
        raise InvalidRequest(f"Unknown or read-only fields: {', '.join(sorted(unknown))}")

    changes = {}
    for field, value in updates.items():
        attr, expected, nullable = EDITABLE_FIELDS[field]
        changes[attr] = _coerce(field, value, expected, nullable)

    config = EventConfig.get_singleton()
    for attr, value in changes.items():
        setattr(config, attr, value)
    config.updated_at = datetime.utcnow()
    db.session.commit()

    if changes:
        current_app.logger.info("Event config updated: %s", ", ".join(sorted(changes)))
    return config
