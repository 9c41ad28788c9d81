import logging
from typing import Any, Mapping

from core.auth import AuthClient, SIGNED_IN, SIGNED_OUT
from core.cache import QueryCache
from core.errors import AuthError, ValidationError
from services.mutations import MutationResult, Notifier
from services.validation import validate_credentials, validate_password_reset

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid login credentials"

def sign_in(auth: AuthClient, notifier: Notifier, form: Mapping[str, Any]) -> MutationResult:
    email, password = validate_credentials(form)
    try:
        user = auth.sign_in_with_password(email, password)
    except AuthError as e:
        if e.message == INVALID_CREDENTIALS:
            notifier.error("Invalid email or password. Please try again or sign up if you don't have an account.")
        else:
            notifier.error(e.message or "Failed to sign in. Please check your credentials.")
        return MutationResult(False, error=e.message)
    return MutationResult(True, data=user)

def sign_up(auth: AuthClient, notifier: Notifier, form: Mapping[str, Any]) -> MutationResult:
    email, password = validate_credentials(form)
    try:
        user = auth.sign_up(email, password)
    except AuthError as e:
        notifier.error(e.message or "Failed to sign up. Please try again.")
        return MutationResult(False, error=e.message)
    notifier.success("Account created and signed in successfully!")
    return MutationResult(True, data=user)

def reset_password(auth: AuthClient, notifier: Notifier, form: Mapping[str, Any]) -> MutationResult:
    """Set a new password for the signed-in account named in the form."""
    email, password = validate_password_reset(form)
    user = auth.get_user()
    if user is not None and user["email"] != email.lower():
        raise ValidationError({"email": "Email does not match the signed-in account"})
    try:
        auth.update_password(password)
    except AuthError as e:
        notifier.error(e.message or "Failed to update password")
        return MutationResult(False, error=e.message)
    notifier.success("Password updated successfully")
    return MutationResult(True, data=user)

def bind_cache(auth: AuthClient, cache: QueryCache):
    """Drop cached rows whenever the signed-in user changes."""
    def _on_change(event: str, user):
        if event in (SIGNED_IN, SIGNED_OUT):
            logger.info("auth event %s, clearing query cache", event)
            cache.clear()
    return auth.on_auth_state_change(_on_change)
