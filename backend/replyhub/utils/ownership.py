"""Ownership checks for sandbox resources."""

from fastapi import HTTPException, status

from replyhub.models.sandbox_environment import SandboxEnvironment
from replyhub.models.user import User


def ensure_owner(environment: SandboxEnvironment, user: User) -> None:
    """
    Raise 403 unless the user owns the environment.

    The shared demo environment has no owner and is therefore read-only
    through the management API.
    """
    if environment.user_id is None or environment.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized access to sandbox environment",
        )
