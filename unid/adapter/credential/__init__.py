"""Credential verification adapters."""

from .client import HttpCredentialVerifier, MockCredentialVerifier

__all__ = ["HttpCredentialVerifier", "MockCredentialVerifier"]
