from __future__ import annotations

import logging
import os
from typing import Any

import firebase_admin
from firebase_admin import auth as firebase_auth
from firebase_admin import credentials
from firebase_admin import exceptions as firebase_exceptions

from .errors import ProviderError


logger = logging.getLogger(__name__)


class FirebaseVerifier:
    """Verifies Google sign-in ID tokens through the Firebase Admin SDK.

    The Firebase app is initialised on first use so the service can boot
    without provider credentials.
    """

    def __init__(self, credentials_path: str | None = None) -> None:
        self.credentials_path = credentials_path
        self._app: Any | None = None

    def _get_app(self) -> Any:
        if self._app is None:
            try:
                self._app = firebase_admin.get_app()
            except ValueError:
                cred = credentials.Certificate(self.credentials_path) if self.credentials_path else None
                self._app = firebase_admin.initialize_app(cred)
        return self._app

    def verify(self, token: str) -> dict[str, Any]:
        """Return the decoded claims (email, name, picture, ...) of a valid ID token."""
        try:
            return firebase_auth.verify_id_token(token, app=self._get_app())
        except (ValueError, firebase_exceptions.FirebaseError) as exc:
            logger.warning("identity provider rejected token: %s", exc)
            raise ProviderError(
                "Failed to authenticate you with google. Try with some other google account"
            ) from exc


_verifier: FirebaseVerifier | None = None


def get_identity_verifier() -> FirebaseVerifier:
    global _verifier
    if _verifier is None:
        _verifier = FirebaseVerifier(os.getenv("FIREBASE_CREDENTIALS"))
    return _verifier
