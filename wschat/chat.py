"""The chat room: online users, received messages and the message box."""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Protocol

from wschat.event_bus import EventBus
from wschat.protocol import MessageData, MsgType, ProtocolError, WebSocketMessage
from wschat.websocket import SendError

log = logging.getLogger(__name__)

AVATAR_URL_TEMPLATE = "https://avatars.dicebear.com/api/adventurer-neutral/{}.svg"


class _Sender(Protocol):
    def try_send(self, text: str) -> None: ...


class _HasUsername(Protocol):
    username: str


def avatar_url(name: str) -> str:
    """Return the avatar image address for a user name."""
    return AVATAR_URL_TEMPLATE.format(name)


@dataclass(frozen=True)
class UserProfile:
    """An online user as shown in the sidebar."""

    name: str
    avatar: str


def _esc(text: str) -> str:
    return html.escape(text, quote=True)


class Chat:
    """Keeps the chat state up to date from bus messages and sends new messages."""

    def __init__(self, user: _HasUsername, service: _Sender, event_bus: EventBus) -> None:
        self.user = user
        self.service = service
        self.users: list[UserProfile] = []
        self.messages: list[MessageData] = []
        register = WebSocketMessage(MsgType.REGISTER, data=user.username)
        try:
            service.try_send(register.to_json())
        except SendError:
            pass
        else:
            log.debug("message sent successfully")
        self.handler_id = event_bus.connect(self.handle_message)

    def handle_message(self, text: str) -> bool:
        """Apply a message from the server; return True when the view changed."""
        envelope = WebSocketMessage.from_json(text)
        if envelope.message_type is MsgType.USERS:
            self.users = [
                UserProfile(name, avatar_url(name)) for name in envelope.data_array or []
            ]
            return True
        if envelope.message_type is MsgType.MESSAGE:
            if envelope.data is None:
                raise ProtocolError("message without data")
            self.messages.append(MessageData.from_json(envelope.data))
            return True
        return False

    def submit_message(self, text: str) -> None:
        """Send a chat line to the server."""
        outgoing = WebSocketMessage(MsgType.MESSAGE, data=text)
        try:
            self.service.try_send(outgoing.to_json())
        except SendError as exc:
            log.debug("error sending to channel: %r", exc)

    def _find_user(self, name: str) -> UserProfile:
        for profile in self.users:
            if profile.name == name:
                return profile
        raise LookupError(f"no online user named {name!r}")

    def _render_user(self, profile: UserProfile) -> str:
        return (
            '<div class="flex items-center gap-4 bg-gray-700 p-3 rounded-lg mb-3 shadow-sm">'
            f'<img class="w-10 h-10 rounded-full" src="{_esc(profile.avatar)}" alt="avatar"/>'
            '<div class="text-sm">'
            f'<p class="font-medium">{_esc(profile.name)}</p>'
            '<p class="text-gray-400 text-xs">Hi there!</p>'
            "</div></div>"
        )

    def _render_message(self, message: MessageData) -> str:
        profile = self._find_user(message.sender)
        if message.message.endswith(".gif"):
            body = f'<img src="{_esc(message.message)}" class="rounded-lg mt-2 max-w-xs"/>'
        else:
            body = _esc(message.message)
        return (
            '<div class="flex items-start gap-3 bg-gray-800 rounded-lg p-4 shadow-sm max-w-xl">'
            f'<img class="w-8 h-8 rounded-full" src="{_esc(profile.avatar)}" alt="avatar"/>'
            "<div>"
            f'<p class="text-sm font-semibold text-violet-400">{_esc(message.sender)}</p>'
            f'<div class="text-sm text-gray-300 mt-1 break-words">{body}</div>'
            "</div></div>"
        )

    def view(self) -> str:
        """Render the chat page as HTML."""
        users = "".join(self._render_user(profile) for profile in self.users)
        messages = "".join(self._render_message(message) for message in self.messages)
        return (
            '<div class="flex w-screen min-h-screen bg-gray-900 text-white overflow-hidden">'
            '<aside class="flex-none w-64 bg-gray-800 p-4 border-r border-gray-700 overflow-y-auto">'
            '<h2 class="text-lg font-semibold text-violet-400 mb-4">Online Users</h2>'
            f"{users}</aside>"
            '<main class="flex-1 flex flex-col">'
            '<header class="h-16 px-6 flex items-center border-b border-gray-700">'
            '<h1 class="text-xl font-bold text-violet-300">💬 Live Chat</h1></header>'
            '<section class="flex-1 overflow-y-auto px-6 py-4 space-y-4">'
            f"{messages}</section>"
            '<footer class="h-16 px-6 flex items-center border-t border-gray-700 bg-gray-800">'
            '<input type="text" name="message" placeholder="Type your message..." required'
            ' class="flex-1 px-4 py-2 mr-3 rounded-full bg-gray-700 text-white"/>'
            '<button class="w-11 h-11 rounded-full bg-violet-600">'
            '<svg viewBox="0 0 24 24" fill="none" class="w-5 h-5 text-white">'
            '<path d="M2 21l21-9L2 3v7l15 2-15 2v7z" fill="currentColor"/></svg>'
            "</button></footer></main></div>"
        )