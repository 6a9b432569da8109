from flask_login import UserMixin


class User(UserMixin):
    """A signed-in user; the username doubles as the session id."""

    def __init__(self, username):
        self.username = username

    def get_id(self):
        return self.username

    def __repr__(self):
        return f"<User {self.username}>"
