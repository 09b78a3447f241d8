"""Routing, the shared user and the terminal chat client entry point."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import sys
import threading
from dataclasses import dataclass
from enum import Enum

from wschat.chat import Chat
from wschat.event_bus import EventBus
from wschat.login import Login
from wschat.protocol import ProtocolError
from wschat.websocket import DEFAULT_URL, WebsocketService


class Route(str, Enum):
    LOGIN = "/"
    CHAT = "/chat"
    NOT_FOUND = "/404"

    @classmethod
    def from_path(cls, path: str) -> Route:
        """Map a location path to a route; unknown paths give NOT_FOUND."""
        path = path.split("#", 1)[0].split("?", 1)[0]
        for route in cls:
            if route.value == path:
                return route
        return cls.NOT_FOUND


@dataclass
class User:
    """The user shared by every page."""

    username: str = "initial"


def switch(route: Route, user: User) -> str:
    """Render the page for a route."""
    if route is Route.LOGIN:
        return Login(user).view()
    if route is Route.CHAT:
        bus = EventBus()
        return Chat(user, WebsocketService(bus), bus).view()
    return "<h1>404 baby</h1>"


async def _session(user: User, url: str) -> None:
    loop = asyncio.get_running_loop()
    bus = EventBus()
    service = WebsocketService(bus, url)
    chat = Chat(user, service, bus)

    printed = 0
    online: list[str] = []

    def show(_text: str) -> None:
        nonlocal printed, online
        names = [profile.name for profile in chat.users]
        if names != online:
            online = names
            print("online: " + ", ".join(names))
        for message in chat.messages[printed:]:
            print(f"{message.sender}: {message.message}")
        printed = len(chat.messages)

    bus.connect(show)

    lines: asyncio.Queue[str | None] = asyncio.Queue()

    def read_stdin() -> None:
        try:
            for line in sys.stdin:
                loop.call_soon_threadsafe(lines.put_nowait, line.rstrip("\n"))
            loop.call_soon_threadsafe(lines.put_nowait, None)
        except RuntimeError:
            return

    threading.Thread(target=read_stdin, daemon=True).start()

    async def pump() -> None:
        while (line := await lines.get()) is not None:
            if line:
                chat.submit_message(line)
        await service.close()

    pumper = asyncio.create_task(pump())
    try:
        await service.run()
    finally:
        pumper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await pumper


def main(argv: list[str] | None = None) -> int:
    """Log in with a user name, then chat over the websocket from the terminal."""
    parser = argparse.ArgumentParser(prog="wschat", description="Terminal chat client.")
    parser.add_argument("--url", default=DEFAULT_URL, help="websocket server address")
    parser.add_argument("--username", help="name to chat under")
    args = parser.parse_args(argv)

    user = User()
    login = Login(user)
    name = args.username if args.username is not None else input("Enter your username: ")
    login.on_input(name.strip())
    if not login.on_click():
        parser.error("username must not be empty")

    try:
        asyncio.run(_session(user, args.url))
    except KeyboardInterrupt:
        return 0
    except (OSError, ProtocolError, LookupError) as exc:
        print(f"wschat: {exc}", file=sys.stderr)
        return 1
    return 0