from lexcase.api.entries import build_entry_router
from lexcase.models import Speech

router = build_entry_router(Speech, "speech", prefix="/speeches")
