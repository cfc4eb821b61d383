from __future__ import annotations

import random
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import DrawFailed, DuplicateJoin, InsufficientParticipants, InvalidRequest, NotFound
from ..extensions import db
from ..models import EventConfig, SecretSantaParticipant


def build_cycle(ids: list[int], rng=random) -> dict[int, int]:
    """
    Shuffle ``ids`` and link each one to its successor, the last wrapping to
    the first. The result is a single cycle: every id gives exactly once,
    receives exactly once, and never to itself.
    """
    if len(ids) < 2:
        raise InsufficientParticipants()

    order = list(ids)
    rng.shuffle(order)
    return {giver: order[(i + 1) % len(order)] for i, giver in enumerate(order)}


def list_participants() -> list[SecretSantaParticipant]:
    return SecretSantaParticipant.query.order_by(SecretSantaParticipant.id.asc()).all()


def find_participant(name: str) -> SecretSantaParticipant | None:
    key = SecretSantaParticipant.key_for(name)
    if not key:
        return None
    return SecretSantaParticipant.query.filter_by(name_key=key).first()


def join(name, preferences) -> SecretSantaParticipant:
    name = (name or "").strip() if isinstance(name, str) else ""
    preferences = (preferences or "").strip() if isinstance(preferences, str) else ""
    if not name:
        raise InvalidRequest("Name is required.")
    if not preferences:
        raise InvalidRequest("Preferences are required.")

    p = SecretSantaParticipant(
        name=name,
        name_key=SecretSantaParticipant.key_for(name),
        preferences=preferences,
    )
    db.session.add(p)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateJoin()

    current_app.logger.info("Secret Santa: %s joined (participant %s)", p.name, p.id)
    return p


def perform_draw(rng=random) -> int:
    """
    Assign every participant a recipient and mark the draw as completed.

    Running it again re-rolls every assignment. All writes go out in a
    single commit; on failure nothing is changed.
    """
    people = list_participants()
    if len(people) < 2:
        current_app.logger.warning(
            "Secret Santa draw refused: %d participant(s)", len(people)
        )
        raise InsufficientParticipants()

    cycle = build_cycle([p.id for p in people], rng=rng)
    state = EventConfig.get_singleton()

    try:
        for p in people:
            p.assigned_recipient_id = cycle[p.id]

        state.secret_santa_draw_completed = True
        state.updated_at = datetime.utcnow()
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Secret Santa draw failed; rolled back")
        raise DrawFailed()

    current_app.logger.info("Secret Santa draw completed for %d participants", len(people))
    return len(people)


def reset_draw() -> None:
    state = EventConfig.get_singleton()
    try:
        SecretSantaParticipant.query.update(
            {"assigned_recipient_id": None}, synchronize_session=False
        )
        state.secret_santa_draw_completed = False
        state.updated_at = datetime.utcnow()
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Secret Santa reset failed; rolled back")
        raise DrawFailed("Failed to reset draw")

    current_app.logger.info("Secret Santa draw reset")


def get_match(name: str) -> dict:
    """
    Reveal who ``name`` gives a gift to. Never reveals who gives to ``name``.
    """
    p = find_participant(name)
    if p is None:
        raise NotFound("Participant not found")

    if p.assigned_recipient_id is None:
        if EventConfig.get_singleton().secret_santa_draw_completed:
            message = "You joined after the draw. Ask the host to run it again."
        else:
            message = "The draw hasn't happened yet. Check back later!"
        return {"matched": False, "message": message}

    recipient = db.session.get(SecretSantaParticipant, p.assigned_recipient_id)
    if recipient is None:
        return {"matched": False, "message": "Your match is no longer available."}

    return {
        "matched": True,
        "match": {"name": recipient.name, "preferences": recipient.preferences},
    }
