import uuid
from dataclasses import replace
from typing import List, Optional, Tuple

from webapi.config.settings import PaginationSettings
from webapi.shared.exceptions import (
    MalformedRequestError,
    PageNotFoundError,
    UserNotFoundError,
    ValidationFailedError,
)
from webapi.shared.logger import StructuredLogger
from webapi.shared.metrics import MetricsCollector, UserMetrics
from webapi.users.models import Page
from webapi.users.patch import apply_patch
from webapi.users.repository import InMemoryUserRepository
from webapi.users.schemas import (
    PatchOperation,
    UserDto,
    UserInfoDto,
    to_entity,
    to_user_dto,
    to_user_info,
)
from webapi.users.validation import UserValidator, ValidationResult


class UserService:
    """
    Request-level user operations.

    Raises the errors from ``webapi.shared.exceptions``; shaping the HTTP
    response is left to the routes.
    """

    def __init__(
        self,
        repository: InMemoryUserRepository,
        validator: UserValidator,
        pagination: PaginationSettings,
        logger: StructuredLogger,
        metrics: MetricsCollector,
    ):
        self.repository = repository
        self.validator = validator
        self.pagination = pagination
        self.logger = logger
        self.metrics = metrics

    def get_user(self, user_id: uuid.UUID) -> UserDto:
        user = self.repository.find_by_id(user_id)
        if user is None:
            self.metrics.increment(UserMetrics.NOT_FOUND)
            raise UserNotFoundError(user_id)
        return to_user_dto(user)

    def create_user(self, info: Optional[UserInfoDto]) -> uuid.UUID:
        if info is None:
            self._reject_malformed("User payload is required")

        self._check(self.validator.validate_login(info))

        user = self.repository.insert(to_entity(info))
        self.metrics.increment(UserMetrics.CREATED)
        self.logger.info("User created", user_id=str(user.id), login=user.login)
        return user.id

    def replace_user(self, user_id: uuid.UUID, info: Optional[UserInfoDto]) -> Tuple[uuid.UUID, bool]:
        """Full update; returns the id and whether a new user was inserted."""
        if info is None or user_id.int == 0:
            self._reject_malformed("User payload and a non-empty id are required")

        self._check(self.validator.validate_full(info))

        user, inserted = self.repository.update_or_insert(to_entity(info, user_id))
        if inserted:
            self.metrics.increment(UserMetrics.CREATED)
            self.logger.info("User created by upsert", user_id=str(user.id))
        else:
            self.metrics.increment(UserMetrics.REPLACED)
            self.logger.info("User replaced", user_id=str(user.id))
        return user.id, inserted

    def patch_user(self, user_id: uuid.UUID, operations: Optional[List[PatchOperation]]) -> None:
        if operations is None:
            self._reject_malformed("Patch document is required")

        stored = self.repository.find_by_id(user_id)
        if stored is None:
            self.metrics.increment(UserMetrics.NOT_FOUND)
            raise UserNotFoundError(user_id)

        result = ValidationResult()
        patched = apply_patch(to_user_info(stored), operations, result)
        self._check(self.validator.validate_full(patched, result))

        self.repository.update(to_entity(patched, stored.id))
        self.metrics.increment(UserMetrics.PATCHED)
        self.logger.info("User patched", user_id=str(user_id), operations=len(operations))

    def delete_user(self, user_id: uuid.UUID) -> None:
        if self.repository.find_by_id(user_id) is None:
            self.metrics.increment(UserMetrics.NOT_FOUND)
            raise UserNotFoundError(user_id)
        self.repository.delete(user_id)
        self.metrics.increment(UserMetrics.DELETED)
        self.logger.info("User deleted", user_id=str(user_id))

    def list_users(self, page_number: int, page_size: int) -> Page[UserDto]:
        """
        Page of users for the requested (unclamped) page number and size.

        Size is clamped to [1, max_page_size] and number to [1, inf). A page
        number past the last page is not found, except page 1 which is
        always answered, empty or not.
        """
        limited_size = self.pagination.clamp_page_size(page_size)
        limited_number = self.pagination.clamp_page_number(page_number)

        page = self.repository.get_page(limited_number, limited_size)
        if page_number > max(page.total_pages, 1):
            self.logger.debug("Requested page out of range", page_number=page_number, total_pages=page.total_pages)
            raise PageNotFoundError(page_number, page.total_pages)

        return replace(page, items=[to_user_dto(u) for u in page.items])

    def _check(self, result: ValidationResult) -> None:
        if not result.is_valid:
            self.metrics.increment(UserMetrics.VALIDATION_FAILED)
            self.logger.warning("User validation failed", errors=result.errors)
            raise ValidationFailedError(result.errors)

    def _reject_malformed(self, message: str) -> None:
        self.metrics.increment(UserMetrics.MALFORMED)
        raise MalformedRequestError(message)
