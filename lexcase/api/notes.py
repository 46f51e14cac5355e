from lexcase.api.entries import build_entry_router
from lexcase.models import Note

router = build_entry_router(Note, "note", prefix="/notes")
