import asyncio

import pytest
from dynaconf import Dynaconf

from tests.types import ReceiveFactory, SendFactory, SettingsFactory
from tokenauth.conf import Settings
from tokenauth.types.asgi import ASGIReceive, ASGISend, Message


@pytest.fixture(scope="session")
def settings_factory() -> SettingsFactory:
    def _get_settings(
        logging: dict | None = None,
        auth: dict | None = None,
    ) -> Settings:
        logging = logging or {
            "debug": True,
            "rich": False,
        }
        auth = auth or {
            "strategies": ["token"],
            "token": {
                "username_header": "x-username",
                "token_header": "x-token",
                "verify_timeout": 5,
            },
        }
        settings = Dynaconf(
            environments=True,
            settings_files=[],
            ENV_FOR_DYNACONF="testing",
            LOGGING=logging,
            AUTH=auth,
        )

        return settings

    return _get_settings


@pytest.fixture
def receive_factory() -> ReceiveFactory:
    def _factory(messages: list[Message] | None = None) -> ASGIReceive:
        if not messages:
            messages = [{"type": "http.request", "body": b"", "more_body": False}]

        class Receiver:
            def __init__(self, messages: list[Message]):
                self.messages = messages

            async def __call__(self):
                await asyncio.sleep(0)
                try:
                    return self.messages.pop(0)
                except Exception:
                    return

        return Receiver(messages)

    return _factory


@pytest.fixture
def send_factory() -> SendFactory:
    def _factory(collected: list[Message]) -> ASGISend:
        async def send(message: Message) -> None:
            await asyncio.sleep(0)
            collected.append(message)

        return send

    return _factory
