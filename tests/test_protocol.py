import pytest

from wschat.protocol import MessageData, MsgType, ProtocolError, WebSocketMessage


def test_register_message_wire_format():
    msg = WebSocketMessage(MsgType.REGISTER, data="alice")
    assert msg.to_json() == '{"messageType":"register","dataArray":null,"data":"alice"}'


@pytest.mark.parametrize(
    "msg_type, wire_name",
    [
        (MsgType.USERS, "users"),
        (MsgType.REGISTER, "register"),
        (MsgType.MESSAGE, "message"),
    ],
)
def test_type_names_are_lowercase(msg_type, wire_name):
    encoded = WebSocketMessage(msg_type).to_json()
    assert encoded == f'{{"messageType":"{wire_name}","dataArray":null,"data":null}}'
    decoded = WebSocketMessage.from_json(f'{{"messageType":"{wire_name}"}}')
    assert decoded.message_type is msg_type


@pytest.mark.parametrize(
    "msg",
    [
        WebSocketMessage(MsgType.USERS, data_array=["alice", "bob"]),
        WebSocketMessage(MsgType.MESSAGE, data="hi there"),
        WebSocketMessage(MsgType.REGISTER, data="carol"),
        WebSocketMessage(MsgType.USERS, data_array=[]),
    ],
)
def test_round_trip(msg):
    assert WebSocketMessage.from_json(msg.to_json()) == msg


def test_missing_optional_fields_are_none():
    msg = WebSocketMessage.from_json('{"messageType":"users"}')
    assert msg.message_type is MsgType.USERS
    assert msg.data_array is None
    assert msg.data is None


def test_unknown_type_is_rejected():
    with pytest.raises(ProtocolError):
        WebSocketMessage.from_json('{"messageType":"shout","data":"x"}')


def test_missing_type_is_rejected():
    with pytest.raises(ProtocolError):
        WebSocketMessage.from_json('{"data":"x"}')


def test_invalid_json_is_rejected():
    with pytest.raises(ProtocolError):
        WebSocketMessage.from_json("not json")


def test_data_array_must_hold_strings():
    with pytest.raises(ProtocolError):
        WebSocketMessage.from_json('{"messageType":"users","dataArray":[1,2]}')


def test_message_data_parses():
    data = MessageData.from_json('{"from":"alice","message":"cat.gif"}')
    assert data == MessageData(sender="alice", message="cat.gif")


def test_message_data_requires_fields():
    with pytest.raises(ProtocolError):
        MessageData.from_json('{"from":"alice"}')


def test_message_inside_envelope():
    envelope = WebSocketMessage.from_json(
        WebSocketMessage(MsgType.MESSAGE, data='{"from":"bob","message":"hey"}').to_json()
    )
    assert MessageData.from_json(envelope.data) == MessageData("bob", "hey")