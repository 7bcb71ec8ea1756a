"""Use case for creating users."""

from sqlalchemy.orm import Session

from app.domain.entities import ADMIN_ROLE, DEFAULT_ROLE, User
from app.infrastructure.repositories import UserRepository
from app.utils import now_utc

ALLOWED_ROLES = (ADMIN_ROLE, DEFAULT_ROLE)


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    phone: str | None = None,
    role: str = DEFAULT_ROLE,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)

    normalized_name = (name or "").strip()
    if not normalized_name:
        raise ValueError("El nombre es obligatorio")

    normalized_email = (email or "").strip().lower()
    if not normalized_email or "@" not in normalized_email:
        raise ValueError("El correo electrónico no es válido")

    if repository.get_by_email(normalized_email):
        msg = "El correo electrónico ya está registrado"
        raise ValueError(msg)

    canonical_role = next(
        (allowed for allowed in ALLOWED_ROLES if allowed.lower() == (role or "").lower()),
        None,
    )
    if canonical_role is None:
        raise ValueError("Rol no permitido")

    user = User(
        id=None,
        name=normalized_name,
        email=normalized_email,
        phone=(phone or "").strip() or None,
        role=canonical_role,
        created_at=now_utc(),
    )
    return repository.create(user)
