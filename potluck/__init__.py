from __future__ import annotations

import logging
import os

import click
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .errors import PotluckError
from .extensions import db, migrate
from .security import hash_host_pin
from .views.admin import admin_bp
from .views.public import public_bp
from .views.santa import santa_bp


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__)

    app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret-change-me")
    app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get("DATABASE_URL", "sqlite:///potluck.db")
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

    # Single shared host PIN for draw/reset
    app.config["HOST_PIN"] = os.environ.get("HOST_PIN", "1234")
    app.config["HOST_CREDENTIAL_CHECK"] = None
    app.config["LOG_LEVEL"] = os.environ.get("LOG_LEVEL", "INFO").upper()

    if test_config:
        app.config.update(test_config)

    # Only the hash is kept around after start-up.
    pin = app.config.pop("HOST_PIN", None)
    app.config["HOST_PIN_HASH"] = hash_host_pin(pin) if pin else None

    app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"], logging.INFO))

    db.init_app(app)
    migrate.init_app(app, db)

    # Blueprints
    app.register_blueprint(public_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(santa_bp)

    @app.errorhandler(PotluckError)
    def handle_potluck_error(e: PotluckError):
        return jsonify({"error": e.message}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description}), e.code

    @app.cli.command("init-db")
    def init_db():
        """Create all tables without going through migrations."""
        db.create_all()
        click.echo("Database initialised.")

    return app
