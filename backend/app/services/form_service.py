"""
Registration windows for the seasonal forms.

The frontend addresses forms by component name (`registrationForm`,
`studentAwardForm`); the API stores them by form type.
"""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BadRequestError, FormClosed, NotFoundError
from app.core.logging import get_logger
from app.domain.enums import FormType
from app.models.form import FormWindow
from app.schemas.form import FormStatusUpdate

logger = get_logger(__name__)

FORM_NAME_MAP = {
    "registrationForm": FormType.SAMUH_LAGAN,
    "studentAwardForm": FormType.STUDENT_AWARDS,
}


def form_status(form: FormWindow | None, form_type: FormType) -> dict:
    """Status payload for one form; an unconfigured form reads as closed."""
    if form is None:
        return {
            "form_type": form_type.value,
            "active": False,
            "start_time": None,
            "end_time": None,
            "event_date": None,
            "last_updated": None,
            "is_currently_active": False,
        }
    return {
        "form_type": form.form_type,
        "active": form.active,
        "start_time": form.start_time,
        "end_time": form.end_time,
        "event_date": form.event_date,
        "last_updated": form.last_updated,
        "is_currently_active": form.is_currently_active(),
    }


async def get_form(db: AsyncSession, form_type: FormType) -> FormWindow | None:
    result = await db.execute(select(FormWindow).where(FormWindow.form_type == form_type.value))
    return result.scalar_one_or_none()


async def get_form_statuses(db: AsyncSession) -> dict[str, dict]:
    result = await db.execute(select(FormWindow))
    forms = {f.form_type: f for f in result.scalars().all()}
    return {ft.value: form_status(forms.get(ft.value), ft) for ft in FormType}


async def check_visibility(db: AsyncSession, form_name: str) -> dict:
    form_type = FORM_NAME_MAP.get(form_name)
    if form_type is None:
        raise BadRequestError(f"Form name must be one of: {', '.join(FORM_NAME_MAP)}")

    form = await get_form(db, form_type)
    if form is None:
        raise NotFoundError("Form", form_type.value)

    status = form_status(form, form_type)
    return {"visible": status["is_currently_active"], "form_status": status}


async def update_form_status(
    db: AsyncSession,
    form_type: FormType,
    data: FormStatusUpdate,
) -> FormWindow:
    if data.start_time and data.end_time and data.end_time <= data.start_time:
        raise BadRequestError("End time must be after start time")

    form = await get_form(db, form_type)
    if form is None:
        form = FormWindow(form_type=form_type.value)
        db.add(form)

    form.active = data.active
    form.start_time = data.start_time
    form.end_time = data.end_time
    form.event_date = data.event_date
    form.last_updated = datetime.now(timezone.utc)

    await db.flush()
    await db.refresh(form)

    logger.info(
        "form_status_updated",
        form_type=form_type.value,
        active=form.active,
        currently_active=form.is_currently_active(),
    )
    return form


async def ensure_form_open(db: AsyncSession, form_type: FormType) -> None:
    form = await get_form(db, form_type)
    if form is None or not form.is_currently_active():
        logger.warning("form_submission_refused", form_type=form_type.value)
        raise FormClosed(form_type.value)
