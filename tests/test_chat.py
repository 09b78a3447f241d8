import json

import pytest

from wschat.chat import AVATAR_URL_TEMPLATE, Chat, UserProfile, avatar_url
from wschat.event_bus import EventBus
from wschat.protocol import MsgType, ProtocolError, WebSocketMessage
from wschat.websocket import SendError


class FakeUser:
    def __init__(self, username):
        self.username = username


class RecordingService:
    def __init__(self):
        self.sent = []

    def try_send(self, text):
        self.sent.append(text)


class FullService:
    def try_send(self, text):
        raise SendError("channel is full")


def users_msg(*names):
    return WebSocketMessage(MsgType.USERS, data_array=list(names)).to_json()


def chat_msg(sender, text):
    inner = json.dumps({"from": sender, "message": text})
    return WebSocketMessage(MsgType.MESSAGE, data=inner).to_json()


@pytest.fixture
def setup():
    bus = EventBus()
    service = RecordingService()
    chat = Chat(FakeUser("alice"), service, bus)
    return chat, service, bus


def test_avatar_url_uses_template():
    assert avatar_url("bob") == AVATAR_URL_TEMPLATE.format("bob")
    assert avatar_url("bob").endswith("/bob.svg")


def test_register_sent_on_creation(setup):
    _, service, _ = setup
    assert len(service.sent) == 1
    assert json.loads(service.sent[0]) == {
        "messageType": "register",
        "dataArray": None,
        "data": "alice",
    }


def test_creation_survives_full_channel():
    bus = EventBus()
    chat = Chat(FakeUser("alice"), FullService(), bus)
    assert chat.users == []
    assert len(bus) == 1


def test_users_message_replaces_users(setup):
    chat, _, _ = setup
    assert chat.handle_message(users_msg("alice", "bob")) is True
    assert chat.users == [
        UserProfile("alice", avatar_url("alice")),
        UserProfile("bob", avatar_url("bob")),
    ]
    assert chat.handle_message(users_msg("carol")) is True
    assert [u.name for u in chat.users] == ["carol"]


def test_users_message_without_array_clears(setup):
    chat, _, _ = setup
    chat.handle_message(users_msg("alice"))
    assert chat.handle_message(WebSocketMessage(MsgType.USERS).to_json()) is True
    assert chat.users == []


def test_chat_message_is_appended(setup):
    chat, _, _ = setup
    assert chat.handle_message(chat_msg("bob", "hello")) is True
    assert [(m.sender, m.message) for m in chat.messages] == [("bob", "hello")]


def test_register_message_is_ignored(setup):
    chat, _, _ = setup
    text = WebSocketMessage(MsgType.REGISTER, data="bob").to_json()
    assert chat.handle_message(text) is False
    assert chat.users == [] and chat.messages == []


def test_message_without_data_raises(setup):
    chat, _, _ = setup
    with pytest.raises(ProtocolError):
        chat.handle_message(WebSocketMessage(MsgType.MESSAGE).to_json())


def test_bus_delivers_to_chat(setup):
    chat, _, bus = setup
    bus.send(users_msg("alice", "bob"))
    bus.send(chat_msg("alice", "hi"))
    assert [u.name for u in chat.users] == ["alice", "bob"]
    assert chat.messages[0].message == "hi"


def test_submit_message_sends_json(setup):
    chat, service, _ = setup
    chat.submit_message("how are you")
    sent = WebSocketMessage.from_json(service.sent[-1])
    assert sent.message_type is MsgType.MESSAGE
    assert sent.data == "how are you"
    assert sent.data_array is None


def test_submit_message_swallows_full_channel():
    bus = EventBus()
    chat = Chat(FakeUser("alice"), FullService(), bus)
    chat.submit_message("hi")
    assert chat.messages == []


def test_view_lists_users_and_messages(setup):
    chat, _, _ = setup
    chat.handle_message(users_msg("bob"))
    chat.handle_message(chat_msg("bob", "<b>hey</b>"))
    page = chat.view()
    assert "Online Users" in page
    assert "Live Chat" in page
    assert avatar_url("bob") in page
    assert "&lt;b&gt;hey&lt;/b&gt;" in page
    assert "<b>hey</b>" not in page


def test_view_renders_gif_as_image(setup):
    chat, _, _ = setup
    chat.handle_message(users_msg("bob"))
    chat.handle_message(chat_msg("bob", "funny.gif"))
    assert '<img src="funny.gif"' in chat.view()


def test_view_unknown_sender_raises(setup):
    chat, _, _ = setup
    chat.handle_message(chat_msg("ghost", "boo"))
    with pytest.raises(LookupError):
        chat.view()