"""Note endpoints (tenant-scoped CRUD).

The tenant is always the authenticated caller's; a note of another tenant
is reported as 404, never 403, so its existence is not revealed.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from notes_api.auth.request_auth import AuthContext, get_auth_context, get_settings
from notes_api.config import Settings
from notes_api.db.session import get_db
from notes_api.schemas import ApiResponse, NoteCreateRequest, NoteOut, NoteUpdateRequest, ok
from notes_api.services.notes import NoteService

router = APIRouter(prefix="/api/notes", tags=["notes"])


def get_note_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> NoteService:
    return NoteService(db, free_limit=settings.free_plan_note_limit)


@router.get("", response_model=ApiResponse)
def list_notes(
    auth: AuthContext = Depends(get_auth_context),
    service: NoteService = Depends(get_note_service),
) -> dict:
    notes = service.list_notes(auth.tenant_id)
    return ok([NoteOut.model_validate(note) for note in notes])


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
def create_note(
    payload: NoteCreateRequest,
    auth: AuthContext = Depends(get_auth_context),
    service: NoteService = Depends(get_note_service),
) -> dict:
    """Create a note.

    Raises:
        ValidationError 400: blank title
        SubscriptionLimitError 402: free plan limit reached
    """
    note = service.create(
        tenant_id=auth.tenant_id,
        user_id=auth.user_id,
        title=payload.title,
        content=payload.content,
    )
    return ok(NoteOut.model_validate(note), "Note created successfully")


@router.get("/{note_id}", response_model=ApiResponse)
def get_note(
    note_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: NoteService = Depends(get_note_service),
) -> dict:
    return ok(NoteOut.model_validate(service.get(note_id, auth.tenant_id)))


@router.put("/{note_id}", response_model=ApiResponse)
def update_note(
    note_id: str,
    payload: NoteUpdateRequest,
    auth: AuthContext = Depends(get_auth_context),
    service: NoteService = Depends(get_note_service),
) -> dict:
    note = service.update(
        note_id,
        auth.tenant_id,
        title=payload.title,
        content=payload.content,
    )
    return ok(NoteOut.model_validate(note), "Note updated successfully")


@router.delete("/{note_id}", response_model=ApiResponse)
def delete_note(
    note_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: NoteService = Depends(get_note_service),
) -> dict:
    service.delete(note_id, auth.tenant_id)
    return ok(None, "Note deleted successfully")
