from datetime import datetime

from .extensions import db


def _iso(value):
    return value.isoformat() if value else None


class EventConfig(db.Model):
    __tablename__ = "event_config"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.Text, nullable=False, default="The Peterson's Annual Dinner")
    description = db.Column(
        db.Text,
        nullable=False,
        default="Join us for an evening of good food, great company, and warm memories. "
                "Please let us know if you can make it!",
    )
    date = db.Column(db.Text, nullable=False, default="2024-12-20")
    time = db.Column(db.Text, nullable=False, default="18:00")
    location = db.Column(db.Text, nullable=False, default="123 Maple Avenue")
    background_image_url = db.Column(db.Text, nullable=True)
    theme_color = db.Column(db.Text, nullable=True, default="hsl(145 20% 35%)")
    font_style = db.Column(db.Text, nullable=True, default="serif")
    confirmation_message = db.Column(
        db.Text,
        nullable=True,
        default="We're delighted you can join us. Your response has been recorded.",
    )

    # --- Secret Santa ---
    secret_santa_enabled = db.Column(db.Boolean, default=False, nullable=False)
    # Budget shown to guests; not enforced anywhere.
    secret_santa_gift_limit = db.Column(db.Integer, default=20, nullable=False)
    # Draw state flag. Owned by services.secret_santa; never patched directly.
    secret_santa_draw_completed = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    @classmethod
    def get_singleton(cls):
        obj = cls.query.order_by(cls.id.asc()).first()
        if not obj:
            obj = cls()
            db.session.add(obj)
            db.session.commit()
        return obj

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "time": self.time,
            "location": self.location,
            "backgroundImageUrl": self.background_image_url,
            "themeColor": self.theme_color,
            "fontStyle": self.font_style,
            "confirmationMessage": self.confirmation_message,
            "secretSantaEnabled": self.secret_santa_enabled,
            "secretSantaGiftLimit": self.secret_santa_gift_limit,
            "secretSantaDrawCompleted": self.secret_santa_draw_completed,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


class Item(db.Model):
    """
    A potluck dish. ``assignee`` is the free-text name of whoever is bringing it.
    """
    __tablename__ = "items"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    assignee = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "assignee": self.assignee,
            "createdAt": _iso(self.created_at),
        }


class Rsvp(db.Model):
    __tablename__ = "rsvps"

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.Text, nullable=False)
    attending = db.Column(db.Boolean, nullable=False)
    plus_one = db.Column(db.Boolean, default=False, nullable=False)
    note = db.Column(db.Text, nullable=True)
    item_id = db.Column(db.Integer, db.ForeignKey("items.id", ondelete="SET NULL"), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    item = db.relationship("Item", foreign_keys=[item_id])

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "attending": self.attending,
            "plusOne": self.plus_one,
            "note": self.note,
            "itemId": self.item_id,
            "createdAt": _iso(self.created_at),
        }


class SecretSantaParticipant(db.Model):
    __tablename__ = "secret_santa_participants"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    # Lower-cased name; the unique constraint is what rejects "Alice" vs "alice".
    name_key = db.Column(db.String(128), unique=True, nullable=False)
    preferences = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    assigned_recipient_id = db.Column(
        db.Integer,
        db.ForeignKey("secret_santa_participants.id", ondelete="SET NULL"),
        nullable=True,
    )
    assigned_recipient = db.relationship(
        "SecretSantaParticipant",
        remote_side=[id],
        foreign_keys=[assigned_recipient_id],
        uselist=False,
        post_update=True,
    )

    __table_args__ = (
        db.CheckConstraint(
            "assigned_recipient_id IS NULL OR assigned_recipient_id != id",
            name="no_self_assignment",
        ),
    )

    @staticmethod
    def key_for(name: str) -> str:
        return (name or "").strip().lower()

    def to_dict(self) -> dict:
        # No assignment data in the public listing.
        return {
            "id": self.id,
            "name": self.name,
            "preferences": self.preferences,
        }
