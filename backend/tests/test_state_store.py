"""
Unit tests for the state store (state_store.py).

Tests loading, default creation, independent self-healing of corrupt
documents, fatal initialisation errors and snapshot saves.
"""

import json

import pytest

from app.core.exceptions import DocumentWriteError, StartupError
from app.core.state_store import StateStore
from app.models.bot import BotStatus
from fakes import MemoryDocumentAdapter, make_bot, seed


def bot_document(*bots):
    return json.dumps([bot.to_dict() for bot in bots])


class TestLoad:
    """Test StateStore.load()."""

    @pytest.mark.asyncio
    async def test_creates_missing_documents(self, store, adapter, storage):
        """Test missing documents are created with defaults."""
        await store.load()

        assert store.loaded is True
        assert store.bots == []
        assert store.user_info.points == 0
        assert store.user_info.user_id == "guest"
        assert adapter.load_json(storage.bot_path) == []
        assert adapter.load_json(storage.user_path) == {"points": 0, "userId": "guest"}

    @pytest.mark.asyncio
    async def test_loads_existing_documents(self, storage):
        """Test existing documents are loaded in order."""
        first, second = make_bot("first"), make_bot("second", user_id="alice")
        adapter = MemoryDocumentAdapter({
            storage.bot_path: bot_document(first, second),
            storage.user_path: json.dumps({"points": 750, "userId": "alice"}),
        })
        store = StateStore(adapter=adapter, storage=storage)

        await store.load()

        assert [b.id for b in store.bots] == [first.id, second.id]
        assert store.bots[1].user_id == "alice"
        assert store.user_info.points == 750
        assert store.user_info.user_id == "alice"
        assert adapter.writes == []

    @pytest.mark.asyncio
    async def test_corrupt_bots_do_not_affect_user_info(self, storage):
        """Test a corrupt bot document is reset while user info still loads."""
        adapter = MemoryDocumentAdapter({
            storage.bot_path: "{not json",
            storage.user_path: json.dumps({"points": 300}),
        })
        store = StateStore(adapter=adapter, storage=storage)

        await store.load()

        assert store.bots == []
        assert store.user_info.points == 300
        assert adapter.load_json(storage.bot_path) == []

    @pytest.mark.asyncio
    async def test_corrupt_user_info_does_not_affect_bots(self, storage):
        """Test a corrupt user document is reset while bots still load."""
        bot = make_bot("kept")
        adapter = MemoryDocumentAdapter({
            storage.bot_path: bot_document(bot),
            storage.user_path: "[1, 2",
        })
        store = StateStore(adapter=adapter, storage=storage)

        await store.load()

        assert [b.id for b in store.bots] == [bot.id]
        assert store.user_info.points == 0
        assert adapter.load_json(storage.user_path) == {"points": 0, "userId": "guest"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("document", ['{"bots": []}', '[{"username": "no id"}]', '[1, 2]'])
    async def test_malformed_bot_document_reset(self, storage, document):
        """Test wrong shapes are treated like corrupt documents."""
        adapter = MemoryDocumentAdapter({storage.bot_path: document})
        store = StateStore(adapter=adapter, storage=storage)

        await store.load()

        assert store.bots == []
        assert adapter.load_json(storage.bot_path) == []

    @pytest.mark.asyncio
    async def test_unreadable_document_reset(self, storage):
        """Test a read failure resets that document only."""
        adapter = MemoryDocumentAdapter({
            storage.bot_path: "[]",
            storage.user_path: json.dumps({"points": 900}),
        })
        adapter.fail_reads.add(storage.user_path)
        store = StateStore(adapter=adapter, storage=storage)

        await store.load()

        assert store.user_info.points == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw,expected", [
        ("500", 500),
        ("abc", 0),
        (None, 0),
        (12.5, 12.5),
        (10 ** 400, 0),
    ])
    async def test_points_coerced(self, storage, raw, expected):
        """Test stored points are coerced to numbers."""
        adapter = MemoryDocumentAdapter({storage.user_path: json.dumps({"points": raw})})
        store = StateStore(adapter=adapter, storage=storage)

        await store.load()

        assert store.user_info.points == expected

    @pytest.mark.asyncio
    async def test_legacy_documents_defaulted(self, storage):
        """Test documents without userId or with the old status label still load."""
        adapter = MemoryDocumentAdapter({
            storage.bot_path: json.dumps([{
                "id": "bot_1700000000000",
                "username": "legacy",
                "status": "Waiting for Verification",
                "createdAt": "2023-11-14T22:13:20.000Z",
                "verificationDeadline": "2023-11-15T22:13:20.000Z",
                "isPrivate": True,
            }]),
            storage.user_path: json.dumps({"points": 250}),
        })
        store = StateStore(adapter=adapter, storage=storage)

        await store.load()

        bot = store.bots[0]
        assert bot.status == BotStatus.WAITING_FOR_VERIFICATION
        assert bot.user_id == "guest"
        assert store.user_info.user_id == "guest"

    @pytest.mark.asyncio
    async def test_initialisation_failure_is_fatal(self, store, adapter):
        """Test failing to create documents raises StartupError."""
        adapter.fail_ensure = True

        with pytest.raises(StartupError):
            await store.load()

        assert store.loaded is False

    @pytest.mark.asyncio
    async def test_repair_failure_is_fatal(self, storage):
        """Test failing to overwrite a corrupt document raises StartupError."""
        adapter = MemoryDocumentAdapter({storage.bot_path: "garbage", storage.user_path: "{}"})
        adapter.fail_writes.add(storage.bot_path)
        store = StateStore(adapter=adapter, storage=storage)

        with pytest.raises(StartupError):
            await store.load()


class TestSaves:
    """Test snapshot saves."""

    @pytest.mark.asyncio
    async def test_save_user_info(self, store, adapter, storage):
        """Test the user document holds points and userId."""
        seed(store, points=125, user_id="alice")

        await store.save_user_info()

        assert adapter.load_json(storage.user_path) == {"points": 125, "userId": "alice"}

    @pytest.mark.asyncio
    async def test_save_bots(self, store, adapter, storage):
        """Test the bot document holds every record in order."""
        bots = [make_bot("a"), make_bot("b")]
        seed(store, bots=bots)

        await store.save_bots()

        assert adapter.load_json(storage.bot_path) == [b.to_dict() for b in bots]

    @pytest.mark.asyncio
    async def test_save_failure_propagates(self, store, adapter, storage):
        """Test write errors reach the caller."""
        adapter.fail_writes.add(storage.bot_path)

        with pytest.raises(DocumentWriteError):
            await store.save_bots()


class TestCounts:
    """Test count helpers."""

    def test_private_bot_count(self, store):
        seed(store, bots=[
            make_bot("a", user_id="alice"),
            make_bot("b", user_id="alice", is_private=False),
            make_bot("c", user_id="bob"),
        ])

        assert store.bot_count == 3
        assert store.private_bot_count() == 2
        assert store.private_bot_count("alice") == 1
        assert store.private_bot_count("carol") == 0

    def test_find_bot(self, store):
        bot = make_bot("a")
        seed(store, bots=[bot])

        assert store.find_bot(bot.id) is bot
        assert store.find_bot("missing") is None
