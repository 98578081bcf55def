import asyncio
from types import SimpleNamespace
from typing import List, Optional, Tuple

import pytest
import pytest_asyncio
from aiogram.exceptions import TelegramBadRequest
from aiogram.methods import DeleteMessage

from database.setup import get_engine
from database.user_menu_state import MenuStateStore
from helpmenu.catalogue import HelpCatalogue
from helpmenu.schemas import ModuleHelpSchema
from helpmenu.views import MenuViewBuilder
from utils.menu_manager import MenuManager


def bad_request(text: str) -> TelegramBadRequest:
    return TelegramBadRequest(method=DeleteMessage(chat_id=1, message_id=1), message=text)


class FakeBot:
    """Registra las llamadas a la API en lugar de hablar con Telegram"""

    def __init__(self):
        self.sent: List[SimpleNamespace] = []
        self.edited: List[SimpleNamespace] = []
        self.deleted: List[Tuple[int, int]] = []
        self.answered: List[str] = []
        self.send_error: Optional[Exception] = None
        self.edit_error: Optional[Exception] = None
        self.delete_error: Optional[Exception] = None
        # Si se fija, delete_message espera a que se abra antes de responder
        self.delete_gate: Optional[asyncio.Event] = None
        self._next_message_id = 100

    async def send_message(self, chat_id, text, parse_mode=None, reply_markup=None, **kwargs):
        if self.send_error:
            raise self.send_error
        self._next_message_id += 1
        message = SimpleNamespace(
            message_id=self._next_message_id,
            chat=SimpleNamespace(id=chat_id),
            text=text,
            reply_markup=reply_markup,
        )
        self.sent.append(message)
        return message

    async def edit_message_text(self, text, chat_id=None, message_id=None, parse_mode=None, reply_markup=None, **kwargs):
        if self.edit_error:
            raise self.edit_error
        self.edited.append(SimpleNamespace(
            chat_id=chat_id, message_id=message_id, text=text, reply_markup=reply_markup
        ))
        return True

    async def delete_message(self, chat_id, message_id, **kwargs):
        if self.delete_gate is not None:
            await self.delete_gate.wait()
        if self.delete_error:
            raise self.delete_error
        self.deleted.append((chat_id, message_id))
        return True

    async def answer_callback_query(self, callback_query_id, **kwargs):
        self.answered.append(callback_query_id)
        return True


async def plain(module: str, text: str) -> str:
    return text


def make_modules(count: int):
    return {
        f"Module{i:02d}": ModuleHelpSchema(summary=f"Summary {i}", commands=[], details="")
        for i in range(count)
    }


@pytest.fixture
def bot() -> FakeBot:
    return FakeBot()


@pytest.fixture
def catalogue() -> HelpCatalogue:
    return HelpCatalogue()


@pytest.fixture
def views(catalogue) -> MenuViewBuilder:
    return MenuViewBuilder(catalogue.modules, transform=plain)


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = get_engine(f"sqlite+aiosqlite:///{tmp_path / 'help_menus.db'}")
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def store(engine) -> MenuStateStore:
    store = MenuStateStore(engine)
    await store.create_schema()
    return store


@pytest_asyncio.fixture
async def manager(store, bot):
    manager = MenuManager(store, idle_timeout=0.05)
    await manager.start(bot)
    yield manager
    manager.shutdown()
