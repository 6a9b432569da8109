from flask import current_app, flash
from flask_login import current_user, login_user, logout_user

from cms.models import User

LOGIN_REQUIRED_MESSAGE = "You must login."


def is_authenticated() -> bool:
    return current_user.is_authenticated


def current_username():
    if not current_user.is_authenticated:
        return None
    return current_user.username


def login(username: str):
    login_user(User(username))
    current_app.logger.info(f"{username} signed in")
    flash("Welcome!", "success")


def logout():
    username = current_username()
    logout_user()
    if username:
        current_app.logger.info(f"{username} signed out")
    flash("You have been logged out.", "info")
