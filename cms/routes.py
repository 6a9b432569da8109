from flask import (
    Blueprint,
    Response,
    render_template,
    redirect,
    url_for,
    flash,
    request,
    current_app,
)
from flask_login import login_required
from markupsafe import Markup

from cms import credentials, documents, limiter
from cms.auth import login, logout
from cms.errors import ValidationError
from cms.renderer import DocumentKind, render

main = Blueprint("main", __name__)

MIN_PASSWORD_LENGTH = 7


# ╔══════════════════════════════════════════════════════════════════════╗
# ║  INDEX                                                             ║
# ╚══════════════════════════════════════════════════════════════════════╝

@main.route("/")
@login_required
def index():
    return render_template("index.html", documents=documents.list())


# ╔══════════════════════════════════════════════════════════════════════╗
# ║  AUTHENTICATION                                                    ║
# ╚══════════════════════════════════════════════════════════════════════╝

@main.route("/users/signin")
def signin_form():
    return render_template("signin.html")


@main.route("/users/signin", methods=["POST"])
@limiter.limit("10 per minute")
def signin():
    username = request.form.get("username", "").strip()
    password = request.form.get("password", "")

    if credentials.verify(username, password):
        login(username)
        return redirect(url_for("main.index"))

    current_app.logger.warning(f"Failed sign-in for {username!r}")
    flash("Invalid Credentials", "danger")
    return render_template("signin.html", username=username)


@main.route("/users/signout", methods=["POST"])
@login_required
def signout():
    logout()
    return redirect(url_for("main.signin_form"))


@main.route("/users/signup")
def signup_form():
    return render_template("signup.html")


def _validate_signup(username, password, confirmation):
    if not username:
        raise ValidationError("Please enter a username.")
    if not credentials.username_available(username):
        raise ValidationError(f"{username} is not available.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("Password must be longer than 6 characters.")
    if password != confirmation:
        raise ValidationError("Passwords do not match.")


@main.route("/users/signup", methods=["POST"])
@limiter.limit("10 per minute")
def signup():
    username = request.form.get("username", "").strip()
    password = request.form.get("password", "")
    confirmation = request.form.get("confirmation", "")

    try:
        _validate_signup(username, password, confirmation)
    except ValidationError as e:
        flash(e.message, "danger")
        return render_template("signup.html", username=username), 422

    credentials.append(username, password)
    current_app.logger.info(f"Created account {username!r}")
    flash("Account created! Please sign in.", "success")
    return redirect(url_for("main.signin_form"))


# ╔══════════════════════════════════════════════════════════════════════╗
# ║  CREATE                                                            ║
# ╚══════════════════════════════════════════════════════════════════════╝

@main.route("/new")
@login_required
def new_document():
    return render_template("new.html")


@main.route("/create", methods=["POST"])
@login_required
def create_document():
    name = request.form.get("new_file", "")

    try:
        name = documents.create(name)
    except ValidationError as e:
        flash(e.message, "danger")
        return render_template("new.html", new_file=name), 422

    current_app.logger.info(f"Created {name}")
    flash(f"{name} was created.", "success")
    return redirect(url_for("main.index"))


# ╔══════════════════════════════════════════════════════════════════════╗
# ║  IMAGES                                                            ║
# ╚══════════════════════════════════════════════════════════════════════╝

@main.route("/img")
@login_required
def upload_form():
    return render_template("upload.html")


@main.route("/img", methods=["POST"])
@login_required
def upload_image():
    file = request.files.get("image")
    filename = file.filename if file else ""
    data = file.read() if file else b""

    try:
        name = documents.upload_binary(filename, data)
    except ValidationError as e:
        flash(e.message, "danger")
        return render_template("upload.html"), 422

    current_app.logger.info(f"Uploaded {name} ({len(data)} bytes)")
    flash(f"{name} was uploaded.", "success")
    return redirect(url_for("main.index"))


# ╔══════════════════════════════════════════════════════════════════════╗
# ║  VIEW  (public)                                                    ║
# ╚══════════════════════════════════════════════════════════════════════╝

@main.route("/<file_name>")
def view_document(file_name):
    rendered = render(file_name, documents.read(file_name))

    if rendered.kind is DocumentKind.MARKDOWN:
        return render_template(
            "document.html", name=file_name, content=Markup(rendered.body)
        )
    return Response(rendered.body, content_type=rendered.mimetype)


# ╔══════════════════════════════════════════════════════════════════════╗
# ║  EDIT                                                              ║
# ╚══════════════════════════════════════════════════════════════════════╝

@main.route("/<file_name>/edit")
@login_required
def edit_document(file_name):
    content = documents.read(file_name).decode("utf-8", errors="replace")
    return render_template("edit.html", name=file_name, content=content)


@main.route("/<file_name>", methods=["POST"])
@login_required
def update_document(file_name):
    documents.write(file_name, request.form.get("file_contents", ""))

    current_app.logger.info(f"Updated {file_name}")
    flash(f"{file_name} has been updated.", "success")
    return redirect(url_for("main.index"))


# ╔══════════════════════════════════════════════════════════════════════╗
# ║  DELETE / DUPLICATE                                                ║
# ╚══════════════════════════════════════════════════════════════════════╝

@main.route("/<file_name>/destroy", methods=["POST"])
@login_required
def delete_document(file_name):
    documents.delete(file_name)

    current_app.logger.info(f"Deleted {file_name}")
    flash(f"{file_name} was deleted.", "success")
    return redirect(url_for("main.index"))


@main.route("/<file_name>/duplicate", methods=["POST"])
@login_required
def duplicate_document(file_name):
    copy_name = documents.duplicate(file_name)

    current_app.logger.info(f"Duplicated {file_name} to {copy_name}")
    flash(f"{file_name} was duplicated as {copy_name}.", "success")
    return redirect(url_for("main.index"))
