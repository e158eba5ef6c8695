"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import UTC, datetime

from fastapi import FastAPI, HTTPException, Query, Request, Response, status

from fuel_logbook.api.schemas import EntryPayload
from fuel_logbook.app_logging import configure_logging
from fuel_logbook.containers import AppContainer
from fuel_logbook.domain.entries import LogEntry
from fuel_logbook.domain.stats import FilteredView
from fuel_logbook.services.export import export_filename, render_csv
from fuel_logbook.services.months import parse_month_filter
from fuel_logbook.services.stats import chart_points


def create_app(container: AppContainer) -> FastAPI:  # noqa: C901
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close application resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/entries")
    async def list_entries(request: Request) -> dict[str, object]:
        """Return all entries, highest odometer first."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.entry_service.list_entries()
        return {"entries": [_entry_payload(entry) for entry in entries]}

    @app.post("/entries", status_code=status.HTTP_201_CREATED)
    async def create_entry(
        payload: EntryPayload, request: Request
    ) -> dict[str, object]:
        """Create a new entry from form data."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.entry_service.create_entry(payload.to_draft())
        return {"entry": _entry_payload(entry)}

    @app.get("/entries/{entry_id}")
    async def get_entry(entry_id: str, request: Request) -> dict[str, object]:
        """Return a single entry."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.entry_service.get_entry(entry_id)
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"entry": _entry_payload(entry)}

    @app.put("/entries/{entry_id}")
    async def update_entry(
        entry_id: str, payload: EntryPayload, request: Request
    ) -> dict[str, object]:
        """Replace an existing entry."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.entry_service.update_entry(
            entry_id, payload.to_draft()
        )
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"entry": _entry_payload(entry)}

    @app.delete("/entries/{entry_id}")
    async def delete_entry(entry_id: str, request: Request) -> dict[str, str]:
        """Delete an entry by id."""
        state_container: AppContainer = request.app.state.container
        if not state_container.entry_service.delete_entry(entry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "deleted"}

    @app.get("/months")
    async def list_months(request: Request) -> dict[str, object]:
        """Return the months that have data, newest first."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.entry_service.list_entries()
        months = state_container.stats_service.get_months(entries)
        return {
            "months": [
                {"month_key": month_key, "label": label} for month_key, label in months
            ]
        }

    @app.get("/stats")
    async def stats(
        request: Request, months: list[str] | None = Query(default=None)
    ) -> dict[str, object]:
        """Return statistics for all data or a set of months."""
        view = _load_view(request.app.state.container, months)
        return {
            "stats": asdict(view.stats) if view.stats else None,
            "monthly": [asdict(month) for month in view.monthly],
            "rows": [_entry_payload(entry) for entry in view.rows],
            "chart": [asdict(point) for point in chart_points(view.monthly)],
        }

    @app.get("/export")
    async def export(
        request: Request, months: list[str] | None = Query(default=None)
    ) -> Response:
        """Download the selected rows as CSV."""
        state_container: AppContainer = request.app.state.container
        selected = _parse_months(months)
        view = _build_view(state_container, selected)
        if not view.rows:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="No data to export"
            )
        filename = export_filename(
            selected, datetime.now(tz=UTC).date(), state_container.settings.locale
        )
        return Response(
            content=render_csv(view.rows),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/commentary")
    async def commentary(
        request: Request, months: list[str] | None = Query(default=None)
    ) -> dict[str, str]:
        """Return short AI feedback on the selected statistics."""
        state_container: AppContainer = request.app.state.container
        view = _load_view(state_container, months)
        text = await state_container.commentary_service.analyze(view.rows, view.stats)
        return {"text": text}

    return app


def _load_view(container: AppContainer, months: list[str] | None) -> FilteredView:
    return _build_view(container, _parse_months(months))


def _build_view(container: AppContainer, selected: set[str]) -> FilteredView:
    entries = container.entry_service.list_entries()
    return container.stats_service.get_view(entries, selected)


def _parse_months(months: list[str] | None) -> set[str]:
    """Parse the month filter, rejecting malformed keys."""
    try:
        return parse_month_filter(months)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _entry_payload(entry: LogEntry) -> dict[str, object]:
    payload = asdict(entry)
    payload["month_key"] = entry.month_key
    return payload
