"""Auth gate: login, registration and explicit user sessions.

A Session is passed to every service call instead of relying on a global
"current user".
"""

import logging

from pydantic import BaseModel

from serenity.auth.identity import AuthError, IdentityAccount, IdentityClient
from serenity.models.schemas import DAYS_IN_WEEK, NEUTRAL_STRESS
from serenity.store.base import DocumentStore

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"

MISSING_CREDENTIALS = "Correo y contraseña son obligatorios"
MISSING_FIELDS = "Todos los campos son obligatorios."
PASSWORD_MISMATCH = "Las contraseñas no coinciden."
MISSING_EMAIL = "Ingrese su correo para restaurar la contraseña"


class Session(BaseModel):
    """Signed-in user.

    Attributes:
        uid: Identity service user id, also the users/{uid} document id.
        email: Account e-mail.
        id_token: Bearer token presented to the API.
    """

    uid: str
    email: str = ""
    id_token: str = ""

    @classmethod
    def from_account(cls, account: IdentityAccount) -> "Session":
        return cls(uid=account.uid, email=account.email, id_token=account.id_token)


class AuthService:
    """Login/registration flow over the identity service and the users collection."""

    def __init__(self, identity: IdentityClient, store: DocumentStore) -> None:
        self._identity = identity
        self._store = store

    async def sign_in(self, email: str, password: str) -> Session:
        email = email.strip()
        if not email or not password:
            raise AuthError(MISSING_CREDENTIALS, 400)
        account = await self._identity.sign_in(email, password)
        logger.info(f"User {account.uid} signed in")
        return Session.from_account(account)

    async def register(
        self, name: str, email: str, password: str, confirm_password: str
    ) -> Session:
        """Create the account and its users/{uid} document.

        The password is only ever sent to the identity service; the profile
        document stores name, e-mail and a neutral stress week.
        """
        name, email = name.strip(), email.strip()
        if not name or not email or not password or not confirm_password:
            raise AuthError(MISSING_FIELDS, 400)
        if password != confirm_password:
            raise AuthError(PASSWORD_MISMATCH, 400)

        account = await self._identity.sign_up(email, password)
        await self._store.set(
            USERS_COLLECTION,
            account.uid,
            {
                "name": name,
                "email": email,
                "stressLevels": [NEUTRAL_STRESS] * DAYS_IN_WEEK,
            },
            merge=True,
        )
        logger.info(f"Registered user {account.uid}")
        return Session.from_account(account)

    async def send_password_reset(self, email: str) -> None:
        email = email.strip()
        if not email:
            raise AuthError(MISSING_EMAIL, 400)
        await self._identity.send_password_reset(email)

    async def resolve(self, id_token: str) -> Session:
        """Turn a bearer token into a Session.

        Raises:
            AuthError: If the token is blank or rejected.
        """
        if not id_token or not id_token.strip():
            raise AuthError("Missing bearer token")
        account = await self._identity.lookup(id_token.strip())
        return Session.from_account(account)
