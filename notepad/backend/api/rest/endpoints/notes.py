"""
Notes API Endpoints.

REST API endpoints for note management.
"""

from fastapi import APIRouter, Query, Response

from notepad.backend.core.dependencies import DbSession
from notepad.backend.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from notepad.backend.services.note import NoteService

router = APIRouter()


@router.get(
    "",
    response_model=list[NoteResponse],
    summary="List notes",
    description=(
        "Notes ordered by most recent update. Optionally restricted to one "
        "category and/or filtered by a case-insensitive search over title, "
        "content and tags."
    ),
)
async def list_notes(
    db: DbSession,
    category_id: str | None = Query(
        default=None,
        alias="categoryId",
        description="Only notes in this category",
    ),
    search: str | None = Query(
        default=None,
        description="Substring to look for in title, content or tags",
    ),
) -> list[NoteResponse]:
    """List notes with optional filters."""
    service = NoteService(db)
    notes = await service.list_notes(category_id=category_id, search=search)
    return [NoteResponse.model_validate(note) for note in notes]


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Get a note",
    description="Get a single note by ID.",
)
async def get_note(
    note_id: str,
    db: DbSession,
) -> NoteResponse:
    """Get a note by ID."""
    service = NoteService(db)
    note = await service.get_note(note_id)
    return NoteResponse.model_validate(note)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=201,
    summary="Create a note",
    description="Create a note in an existing category.",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
) -> NoteResponse:
    """Create a new note."""
    service = NoteService(db)
    note = await service.create_note(data)
    return NoteResponse.model_validate(note)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    summary="Update a note",
    description="Update an existing note. Only provided fields are updated.",
)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    db: DbSession,
) -> NoteResponse:
    """Update a note."""
    service = NoteService(db)
    note = await service.update_note(note_id, data)
    return NoteResponse.model_validate(note)


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a note",
    description="Permanently delete a note.",
)
async def delete_note(
    note_id: str,
    db: DbSession,
) -> Response:
    """Delete a note."""
    service = NoteService(db)
    await service.delete_note(note_id)
    return Response(status_code=204)
