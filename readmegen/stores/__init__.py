"""Credential persistence for the generator."""

from .credential_store import RELAY_KEY, CredentialStore, JsonCredentialStore, MemoryCredentialStore

__all__ = ["CredentialStore", "JsonCredentialStore", "MemoryCredentialStore", "RELAY_KEY"]
