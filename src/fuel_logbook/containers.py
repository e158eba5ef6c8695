"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fuel_logbook.adapters.openai_commentary_client import OpenAICommentaryClient
from fuel_logbook.adapters.supabase_entry_repository import SupabaseEntryRepository
from fuel_logbook.config import Settings
from fuel_logbook.services.commentary import CommentaryService
from fuel_logbook.services.entries import EntryService
from fuel_logbook.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    entry_service: EntryService
    stats_service: StatsService
    commentary_service: CommentaryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_repository = SupabaseEntryRepository(
        client=supabase_client,
        table=resolved_settings.storage_table,
        storage_key=resolved_settings.storage_key,
    )
    commentary_client = (
        OpenAICommentaryClient.create(resolved_settings.openai_api_key)
        if resolved_settings.commentary_enabled
        else None
    )
    commentary_service = CommentaryService(
        client=commentary_client,
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        if commentary_client is not None:
            await commentary_client.close()

    return AppContainer(
        settings=resolved_settings,
        entry_service=EntryService(entry_repository),
        stats_service=StatsService(locale=resolved_settings.locale),
        commentary_service=commentary_service,
        close_resources=close_resources,
    )
