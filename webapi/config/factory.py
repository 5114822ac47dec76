from typing import Optional

from webapi.config.logger import get_logger
from webapi.config.settings import Settings
from webapi.shared.metrics import MetricsCollector
from webapi.users.repository import InMemoryUserRepository
from webapi.users.services import UserService
from webapi.users.validation import UserValidator


# ----------------------------
# Metrics factory
# ----------------------------
def build_metrics(settings: Optional[Settings] = None) -> MetricsCollector:
    return MetricsCollector(logger=get_logger("Metrics", settings))


# ----------------------------
# User service factory
# ----------------------------
def build_user_service(
    settings: Settings,
    repository: Optional[InMemoryUserRepository] = None,
    metrics: Optional[MetricsCollector] = None,
) -> UserService:
    return UserService(
        repository=repository if repository is not None else InMemoryUserRepository(),
        validator=UserValidator(),
        pagination=settings.pagination,
        logger=get_logger("UserService", settings),
        metrics=metrics if metrics is not None else build_metrics(settings),
    )
