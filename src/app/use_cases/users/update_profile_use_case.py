"""
Update Profile Use Case

Partial profile edits for the signed-in user.
"""

from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.sanitizer import sanitize_input
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from .dtos import UpdateProfileCommand, UserProfile

USERNAME_TAKEN = Error("USERNAME_TAKEN", "Username is already taken", field="username")


class UpdateProfileUseCase:
    """
    Use case for editing displayName, username, bio and status.

    Business Rules:
    - Every field is optional and changed independently
    - Free text is sanitized before it is stored
    - Usernames are stored lower-cased and must not belong to another user;
      keeping one's own username is not a clash
    - Session claims are not rewritten here; they refresh at the next
      sign-in or explicit session refresh
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, command: UpdateProfileCommand) -> Result[UserProfile]:
        async with self.uow:
            user = await self.uow.users.get_active_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if command.display_name is not None:
                display_name = sanitize_input(command.display_name)
                if not display_name:
                    return Return.err(
                        Error(
                            "INVALID_DISPLAY_NAME",
                            "Display name is required",
                            field="displayName",
                        )
                    )
                user.display_name = display_name

            if command.username is not None:
                username = sanitize_input(command.username).lower()
                if not username:
                    return Return.err(
                        Error("INVALID_USERNAME", "Username is required", field="username")
                    )
                owner = await self.uow.users.get_by_username_excluding(username, user.id)
                if owner is not None:
                    return Return.err(USERNAME_TAKEN)
                user.username = username

            if command.bio is not None:
                user.bio = sanitize_input(command.bio)

            if command.status is not None:
                user.status = command.status

            user.updated_at = utcnow()

            try:
                user = await self.uow.users.update(user)
            except IntegrityError:
                return Return.err(USERNAME_TAKEN)

            await self.uow.commit()

            return Return.ok(UserProfile.from_user(user))
