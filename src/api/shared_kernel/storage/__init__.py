"""Blob storage shared by onboarding (documents) and fleet (listing photos)."""

from shared_kernel.storage.exceptions import BlobStoreError
from shared_kernel.storage.ports import IBlobStore

__all__ = ["BlobStoreError", "IBlobStore"]
