# WSGI entry point
# ────────────────
# Serve with any WSGI server, e.g.
#   gunicorn wsgi:application
# or locally with
#   flask --app wsgi run
#
# Set CMS_ENV=test to point the app at tests/data and tests/users.yml.

import os

from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"))

from cms import create_app  # noqa: E402

app = create_app()
application = app
