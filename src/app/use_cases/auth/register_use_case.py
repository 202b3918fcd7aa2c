from typing import Iterable

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.password_service import (
    hash_password,
    is_email_allowed,
    validate_password_strength,
)
from src.app.services.sanitizer import sanitize_input
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.username_service import generate_username
from src.app.use_cases.users.dtos import UserProfile
from src.domain.base import utcnow
from src.domain.entities import User, UserPresence
from .dtos import RegisterCommand


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[UserProfile] (created account, no password hash)

    Business Logic:
    1. Normalize email (lower-case, trimmed), sanitize display name
    2. Reject blocked email domains
    3. Enforce password strength, reporting every violated rule
    4. Reject an email already registered, or a display name already
       taken (case-insensitive), tagging the clashing field
    5. Hash password with bcrypt cost factor 12
    6. Generate a free username from the display name
    7. Create the user ONLINE; the unique constraints on email and username
       decide concurrent races
    8. Commit transaction
    """

    def __init__(self, uow: UnitOfWork, blocked_email_domains: Iterable[str] = ()):
        self.uow = uow
        self.blocked_email_domains = list(blocked_email_domains)

    async def execute(self, command: RegisterCommand) -> Result[UserProfile]:
        email = command.email.lower().strip()
        display_name = sanitize_input(command.display_name)

        if not display_name:
            return Return.err(
                Error("INVALID_DISPLAY_NAME", "Display name is required", field="displayName")
            )

        if not is_email_allowed(email, self.blocked_email_domains):
            return Return.err(
                Error("EMAIL_DOMAIN_NOT_ALLOWED", "Email domain is not allowed", field="email")
            )

        strength = validate_password_strength(command.password)
        if not strength.is_valid:
            return Return.err(
                Error(
                    "WEAK_PASSWORD",
                    "Password does not meet strength requirements",
                    field="password",
                    details=[{"field": "password", "message": e} for e in strength.errors],
                )
            )

        async with self.uow:
            existing = await self.uow.users.find_by_email_or_display_name(email, display_name)
            if existing is not None:
                if existing.email == email:
                    return Return.err(
                        Error("EMAIL_ALREADY_EXISTS", "Email already registered", field="email")
                    )
                return Return.err(
                    Error(
                        "DISPLAY_NAME_TAKEN",
                        "Display name already taken",
                        field="displayName",
                    )
                )

            password_hash = hash_password(command.password)
            username = await generate_username(display_name, self.uow.users)

            now = utcnow()
            user = User(
                email=email,
                username=username,
                display_name=display_name,
                password_hash=password_hash,
                status=UserPresence.ONLINE,
                created_at=now,
                updated_at=now,
                last_seen=now,
            )
            try:
                user = await self.uow.users.create(user)
            except IntegrityError:
                # Lost a race against a concurrent registration
                await self.uow.rollback()
                return Return.err(await self._race_conflict(email, display_name))

            await self.uow.commit()

            return Return.ok(UserProfile.from_user(user))

    async def _race_conflict(self, email: str, display_name: str) -> Error:
        """Name the unique column the winning insert took: email, else username."""
        winner = await self.uow.users.find_by_email_or_display_name(email, display_name)
        if winner is not None and winner.email == email:
            return Error("EMAIL_ALREADY_EXISTS", "Email already registered", field="email")
        return Error("USERNAME_TAKEN", "Username is already taken", field="username")
