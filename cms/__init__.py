from flask import Flask

from cms.config import Config, TestConfig, is_test_env
from cms.credentials import CredentialStore
from cms.documents import DocumentRepository
from cms.extensions import bcrypt, limiter, login_manager

# ── Storage instances (bound to the app's config in create_app) ───────────
credentials = CredentialStore()
documents = DocumentRepository()


def create_app(config_class=None):
    """Application factory — creates and configures the Flask app."""

    if config_class is None:
        config_class = TestConfig if is_test_env() else Config

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialise extensions
    bcrypt.init_app(app)
    login_manager.init_app(app)
    limiter.init_app(app)

    # A missing or malformed credential file is fatal at startup
    credentials.init_app(app)
    documents.init_app(app)

    # Flask-Login configuration
    from cms.auth import LOGIN_REQUIRED_MESSAGE

    login_manager.login_view = "main.signin_form"
    login_manager.login_message = LOGIN_REQUIRED_MESSAGE
    login_manager.login_message_category = "danger"

    # ── User loader callback ──────────────────────────────────────────
    from cms.models import User

    @login_manager.user_loader
    def load_user(user_id):
        if user_id in credentials.load_all():
            return User(user_id)
        return None

    # ── Register blueprints ─────────────────────────────────────────
    from cms.routes import main

    app.register_blueprint(main)

    # ── Error handlers ────────────────────────────────────────────────
    from flask import flash, jsonify, redirect, render_template, url_for

    from cms.errors import DocumentNotFound

    @app.errorhandler(DocumentNotFound)
    def document_not_found(e):
        flash(e.message, "danger")
        return redirect(url_for("main.index"))

    @app.errorhandler(404)
    def not_found(e):
        return render_template("errors/404.html"), 404

    @app.errorhandler(413)
    def upload_too_large(e):
        limit_mb = app.config["MAX_CONTENT_LENGTH"] // (1024 * 1024)
        flash(f"Uploads are limited to {limit_mb} MB.", "danger")
        return redirect(url_for("main.upload_form"))

    @app.errorhandler(429)
    def rate_limit_exceeded(e):
        return (
            jsonify(
                {
                    "error": "Too many attempts. Please wait a moment before trying again.",
                    "retry_after": str(e.description),
                }
            ),
            429,
        )

    # ── CLI commands ──────────────────────────────────────────────────
    import click

    @app.cli.command("create-user")
    @click.argument("username")
    @click.password_option()
    def create_user(username, password):
        """Add a user to the credential file."""
        username = username.strip()
        if not credentials.username_available(username):
            click.echo(f"Error: Username '{username}' is not available.")
            return
        credentials.append(username, password)
        click.echo(f"✓ User '{username}' created.")

    return app
