"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from fuel_logbook.config import Settings
from fuel_logbook.containers import AppContainer
from fuel_logbook.domain.entries import EntryType, LogEntry
from fuel_logbook.services.commentary import CommentaryClient, CommentaryService
from fuel_logbook.services.entries import EntryRepository, EntryService
from fuel_logbook.services.stats import StatsService


def make_entry(  # noqa: PLR0913
    odometer: float,
    day: str,
    entry_type: EntryType = "gas",
    amount: float = 40.0,
    cost: float = 60.0,
    entry_id: str | None = None,
) -> LogEntry:
    """Build a log entry with a derived unit price."""
    return LogEntry(
        id=entry_id or f"entry-{odometer:g}-{day}",
        date=date.fromisoformat(day),
        type=entry_type,
        odometer=odometer,
        amount=amount,
        cost=cost,
        price_per_unit=cost / amount if amount else 0.0,
    )


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry repository for tests."""

    entries: list[LogEntry] = field(default_factory=list)
    writes: int = 0

    def list_all(self) -> list[LogEntry]:
        return list(self.entries)

    def replace_all(self, entries: list[LogEntry]) -> None:
        self.entries = list(entries)
        self.writes += 1


@dataclass
class FailingEntryRepository(InMemoryEntryRepository):
    """In-memory repository whose reads or writes can be made to fail."""

    fail_reads: bool = True
    fail_writes: bool = True
    write_attempts: int = 0

    def list_all(self) -> list[LogEntry]:
        if self.fail_reads:
            raise RuntimeError("storage unavailable")
        return super().list_all()

    def replace_all(self, entries: list[LogEntry]) -> None:
        self.write_attempts += 1
        if self.fail_writes:
            raise RuntimeError("storage unavailable")
        super().replace_all(entries)


@dataclass
class FakeCommentaryClient(CommentaryClient):
    """Fake commentary client returning fixed text."""

    text: str = "Charge more often to lower your costs."
    prompts: list[str] = field(default_factory=list)

    async def generate(self, *, model: str, store: bool, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.text


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def sample_entries() -> list[LogEntry]:
    return [
        make_entry(1700, "2024-03-15", "electric", amount=50, cost=15),
        make_entry(1300, "2024-02-10", "gas", amount=35, cost=55),
        make_entry(1000, "2024-01-05", "gas", amount=40, cost=60),
    ]


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def commentary_client() -> FakeCommentaryClient:
    return FakeCommentaryClient()


@pytest.fixture
def container(
    settings: Settings,
    entry_repository: InMemoryEntryRepository,
    commentary_client: FakeCommentaryClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        entry_service=EntryService(entry_repository),
        stats_service=StatsService(locale=settings.locale),
        commentary_service=CommentaryService(
            client=commentary_client, model=settings.openai_model
        ),
        close_resources=close_resources,
    )
