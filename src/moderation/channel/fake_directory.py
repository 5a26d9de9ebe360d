"""In-memory user directory — a stand-in identity service for tests and local runs."""

from moderation.channel.directory_port import UserDirectoryPort


class InMemoryUserDirectory(UserDirectoryPort):
    def __init__(self):
        self.contacts: dict[str, dict] = {}
        self.raise_error = False

    def add_contact(self, user_id, name: str | None = None, email: str | None = None):
        self.contacts[str(user_id)] = {"name": name, "email": email}

    def configure(self, raise_error: bool = False):
        self.raise_error = raise_error

    def get_contact(self, user_id: str) -> dict | None:
        if self.raise_error:
            raise ConnectionError("User directory unavailable")
        return self.contacts.get(str(user_id))

    def reset(self):
        self.contacts.clear()
        self.raise_error = False
