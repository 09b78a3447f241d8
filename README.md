# wschat

wschat is a small chat client for the terminal. It connects to a chat server
over a WebSocket (`ws://127.0.0.1:8080` by default) and exchanges JSON frames
with it.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Usage

```
wschat [--url URL] [--username NAME]
```

- `--url` sets the server address. The default is `ws://127.0.0.1:8080`.
- `--username` sets the name you chat under. If you leave it out, you are
  asked for it. Surrounding whitespace is removed. An empty name is refused.

After connecting, the client registers your name with the server. Then:

- Each line you type on standard input is sent as a chat message. Empty lines
  are skipped.
- Whenever the server's list of online users changes, the list is printed as
  `online: alice, bob`.
- Each incoming message is printed as `sender: text`.
- End of input (Ctrl-D) closes the connection and ends the session.

The exit status is 1 if a connection error or a malformed frame stops the
session. Otherwise it is 0, including after Ctrl-C.

## Protocol

Every frame is a JSON object:

```json
{"messageType":"register","dataArray":null,"data":"alice"}
{"messageType":"message","dataArray":null,"data":"hello"}
{"messageType":"users","dataArray":["alice","bob"],"data":null}
```

In an incoming `message` frame, `data` is itself a JSON object of the form
`{"from": "...", "message": "..."}`. If a frame does not match this format,
`wschat.protocol.ProtocolError` is raised. This is a subclass of `ValueError`.

## Library use

- `wschat.event_bus.EventBus`: `connect(callback)` returns a handler id,
  `disconnect(handler_id)` removes that subscriber, and `send(message)` passes
  the message to every subscriber.
- `wschat.protocol`: `MsgType`, `WebSocketMessage` (`to_json()`,
  `from_json(text)`) and `MessageData.from_json(text)`.
- `wschat.websocket.WebsocketService(event_bus, url)`:
  - `try_send(text)` queues outgoing text. It raises `SendError` when the
    queue (1000 entries) is full or the service is closed.
  - `await run()` connects and passes every incoming text frame to the bus.
    Binary frames are passed on too if they decode as UTF-8.
  - `await close()` stops the service.
- `wschat.chat.Chat(user, service, event_bus)` keeps the online users
  (`UserProfile` with an avatar from `avatar_url(name)`) and the received
  messages. Its methods are `handle_message(text)` and `submit_message(text)`.
  `view()` renders the chat page as an HTML string. In that page, a message
  ending in `.gif` is shown as an image.
- `wschat.login.Login(user)` holds the name being typed. Its methods are
  `on_input(value)`, `can_submit()` and `on_click()`. `view()` renders the
  login page as HTML.
- `wschat.app`: `Route` (`/`, `/chat`, `/404`, with `Route.from_path(path)`),
  `User`, `switch(route, user)` which returns the page HTML for a route, and
  `main(argv)`.

## What it does not do

wschat is a client only. It does not include a chat server. The HTML that
`view()` and `switch()` produce is returned as strings. Nothing serves those
pages or makes them interactive, so the only interactive interface is the
terminal client.

## Running the tests

```
pytest
```