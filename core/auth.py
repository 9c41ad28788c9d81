"""Password sessions backed by the ``users`` collection.

One ``AuthClient`` lives per browser session. It only ever exposes the public
part of a user document (id, email, created_at).
"""
import hashlib
import hmac
import logging
import os
import uuid
from typing import Any, Callable, Dict, List, Optional

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from core.constants import USERS
from core.errors import AuthError
from core.time_utils import utc_now_naive

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
USER_UPDATED = "USER_UPDATED"

PBKDF2_ITERATIONS = 200_000

AuthListener = Callable[[str, Optional[Dict[str, Any]]], None]

def hash_password(password: str, salt: Optional[str] = None, iterations: int = PBKDF2_ITERATIONS) -> str:
    salt = salt or os.urandom(16).hex()
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), bytes.fromhex(salt), iterations)
    return f"pbkdf2_sha256${iterations}${salt}${digest.hex()}"

def verify_password(password: str, stored: str) -> bool:
    try:
        _, iterations, salt, _ = stored.split("$")
    except (AttributeError, ValueError):
        return False
    return hmac.compare_digest(hash_password(password, salt, int(iterations)), stored)

def _public(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": doc["_id"], "email": doc["email"], "created_at": doc.get("created_at")}

def _norm_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthClient:
    def __init__(self, db: Database):
        self.users = db[USERS]
        self._user: Optional[Dict[str, Any]] = None
        self._listeners: List[AuthListener] = []

    def get_user(self) -> Optional[Dict[str, Any]]:
        return self._user

    def on_auth_state_change(self, callback: AuthListener) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)
        return unsubscribe

    def _emit(self, event: str):
        for cb in list(self._listeners):
            cb(event, self._user)

    def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        """Create the account and start a session for it."""
        email = _norm_email(email)
        doc = {
            "_id": uuid.uuid4().hex,
            "email": email,
            "password_hash": hash_password(password),
            "created_at": utc_now_naive(),
        }
        try:
            if self.users.count_documents({"email": email}, limit=1):
                raise AuthError("User already registered", code="user_already_exists")
            self.users.insert_one(doc)
        except DuplicateKeyError as e:
            raise AuthError("User already registered", code="user_already_exists") from e
        except PyMongoError as e:
            logger.error("sign up failed: %s", e)
            raise AuthError(str(e)) from e
        logger.info("signed up %s", email)
        self._user = _public(doc)
        self._emit(SIGNED_IN)
        return self._user

    def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        try:
            doc = self.users.find_one({"email": _norm_email(email)})
        except PyMongoError as e:
            logger.error("sign in failed: %s", e)
            raise AuthError(str(e)) from e
        if not doc or not verify_password(password, doc.get("password_hash", "")):
            logger.info("rejected sign in for %s", _norm_email(email))
            raise AuthError("Invalid login credentials", code="invalid_credentials")
        self._user = _public(doc)
        logger.info("signed in %s", doc["email"])
        self._emit(SIGNED_IN)
        return self._user

    def sign_out(self):
        if self._user is None:
            return
        logger.info("signed out %s", self._user["email"])
        self._user = None
        self._emit(SIGNED_OUT)

    def update_password(self, password: str) -> Dict[str, Any]:
        if self._user is None:
            raise AuthError("Auth session missing!", code="session_missing")
        try:
            self.users.update_one(
                {"_id": self._user["id"]},
                {"$set": {"password_hash": hash_password(password), "updated_at": utc_now_naive()}},
            )
        except PyMongoError as e:
            logger.error("password update failed: %s", e)
            raise AuthError(str(e)) from e
        logger.info("updated password for %s", self._user["email"])
        self._emit(USER_UPDATED)
        return self._user
