import secrets

from fastapi import HTTPException, Request, status

from hiver.config import settings


def verify_password(password: str) -> bool:
    """Verify the shared sign-in password without raising exceptions."""
    if not settings.auth_password:
        return False
    return secrets.compare_digest(password, settings.auth_password)


def get_viewer(request: Request) -> str | None:
    """Identity of the signed-in viewer, if any."""
    return request.session.get("viewer_id")


def verify_session(request: Request) -> str:
    """Verify session-based authentication."""
    viewer = get_viewer(request)
    if not viewer:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return viewer
