"""
Registration form windows: public status checks and the admin toggle.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import require_roles
from app.db.session import get_db
from app.domain.enums import FORM_ROLES, FormType
from app.models.user import User
from app.schemas.form import FormStatus, FormStatusUpdate, FormVisibility
from app.services import form_service

router = APIRouter(prefix="/forms", tags=["Forms"])


@router.get("/public/status", response_model=dict[str, FormStatus])
async def public_form_status(db: AsyncSession = Depends(get_db)):
    """Every form, keyed by form type. Unconfigured forms read as closed."""
    return await form_service.get_form_statuses(db)


@router.get("/check-form-visibility/{form_name}", response_model=FormVisibility)
async def check_form_visibility(form_name: str, db: AsyncSession = Depends(get_db)):
    return await form_service.check_visibility(db, form_name)


@router.put("/status/{form_type}", response_model=FormStatus)
async def update_form_status(
    form_type: FormType,
    data: FormStatusUpdate,
    _: User = Depends(require_roles(*FORM_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    form = await form_service.update_form_status(db, form_type, data)
    return form_service.form_status(form, form_type)
