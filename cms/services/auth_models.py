"""
Session user model for Flask-Login
"""

from flask_login import UserMixin

class User(UserMixin):
    """
    Signed-in user. The username is the identifier Flask-Login keeps in the session.
    """

    def __init__(self, username):
        self.id = username
        self.username = username

    def get_id(self):
        return str(self.id)

    def __repr__(self):
        return f"<User {self.username}>"
