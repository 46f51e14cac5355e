from lexcase.services.google import GoogleIdentity, GoogleVerifier
from lexcase.services.storage import StorageService, StoredFile

__all__ = [
    "GoogleIdentity",
    "GoogleVerifier",
    "StorageService",
    "StoredFile",
]
