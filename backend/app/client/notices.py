"""
Form notice watcher.

Polls the visibility of the seasonal forms and posts an in-app
notification when one of them opens. The last status seen for each form
lives in a StatusStore (memory or a small JSON file).

The read-compare-write in poll_once is not atomic. If two polls overlap
and both read "closed" before either writes "open", both create a
notification. The server does not deduplicate them.
"""

import asyncio
import json
from pathlib import Path

from app.client.api import BookingApiClient
from app.client.errors import ApiError, OperationCancelled
from app.client.session import CancelToken
from app.core.logging import get_logger

logger = get_logger(__name__)

# component name -> (form type, notice text)
WATCHED_FORMS = {
    "registrationForm": ("samuhLagan", "Samuh Lagan registration is now open."),
    "studentAwardForm": ("studentAwards", "Student award registration is now open."),
}


class InMemoryStatusStore:
    def __init__(self) -> None:
        self._data: dict[str, bool] = {}

    async def get(self, form_type: str) -> bool | None:
        return self._data.get(form_type)

    async def set(self, form_type: str, visible: bool) -> None:
        self._data[form_type] = visible


class JsonFileStatusStore:
    """Persists last-seen statuses across restarts, one JSON object per file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, bool]:
        if not self.path.exists():
            return {}
        return json.loads(self.path.read_text() or "{}")

    async def get(self, form_type: str) -> bool | None:
        return self._load().get(form_type)

    async def set(self, form_type: str, visible: bool) -> None:
        data = self._load()
        data[form_type] = visible
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data))


class FormNoticeWatcher:
    def __init__(self, client: BookingApiClient, store=None, forms: dict | None = None) -> None:
        self.client = client
        self.store = store if store is not None else InMemoryStatusStore()
        self.forms = forms or WATCHED_FORMS

    async def poll_once(self, cancel: CancelToken | None = None) -> list[dict]:
        """Check every watched form once. Returns the notifications created."""
        created = []
        for form_name, (form_type, message) in self.forms.items():
            try:
                result = await self.client.check_form_visibility(form_name, cancel)
            except ApiError as e:
                # Unconfigured forms answer 404; treat any failure as "not visible yet".
                logger.debug("form_visibility_unavailable", form=form_name, error=e.message)
                continue

            visible = bool(result.get("visible"))
            previous = await self.store.get(form_type)

            if visible and not previous:
                notification = await self.client.create_form_notification(form_type, message, cancel)
                if notification is not None:
                    created.append(notification)
                    logger.info("form_opened_notice", form_type=form_type)

            await self.store.set(form_type, visible)
        return created

    async def run(self, interval: float, cancel: CancelToken) -> None:
        """Poll every `interval` seconds until `cancel` is cancelled."""
        while not cancel.cancelled:
            try:
                await self.poll_once(cancel)
            except OperationCancelled:
                return
            await asyncio.sleep(interval)
