"""The login page: pick a user name before entering the chat."""

from __future__ import annotations

import html
from typing import Protocol


class _HasUsername(Protocol):
    username: str


class Login:
    """Holds the name being typed and stores it on the shared user when submitted."""

    def __init__(self, user: _HasUsername) -> None:
        self.user = user
        self.username = ""

    def on_input(self, value: str) -> None:
        """Record the current contents of the name field."""
        self.username = value

    def can_submit(self) -> bool:
        """The button is enabled only once a name has been typed."""
        return len(self.username) >= 1

    def on_click(self) -> bool:
        """Store the typed name on the shared user; False when the button is disabled."""
        if not self.can_submit():
            return False
        self.user.username = self.username
        return True

    def view(self) -> str:
        """Render the login page as HTML."""
        disabled = "" if self.can_submit() else " disabled"
        value = html.escape(self.username, quote=True)
        return (
            '<div class="min-h-screen w-full bg-gray-900 text-white flex items-center '
            'justify-center p-4">'
            '<div class="bg-gray-800 rounded-xl shadow-lg p-8 w-full max-w-md space-y-6">'
            '<h2 class="text-2xl font-semibold text-center text-violet-400">'
            "Welcome Back 👋</h2>"
            '<form class="space-y-4">'
            f'<input placeholder="Enter your username" value="{value}"'
            ' class="w-full px-4 py-3 rounded-lg bg-gray-700 text-white"/>'
            '<a href="/chat" class="block">'
            f'<button{disabled} class="w-full py-3 px-4 rounded-lg bg-violet-600">'
            "Go Chatting!</button></a>"
            "</form></div></div>"
        )