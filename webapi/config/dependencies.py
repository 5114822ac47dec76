from fastapi import Request

from webapi.config.settings import Settings
from webapi.shared.metrics import MetricsCollector
from webapi.users.repository import InMemoryUserRepository
from webapi.users.services import UserService

# ----------------------------
# Dependency Injection Functions
# ----------------------------
# Everything lives on app.state, built once by create_app().

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_repository(request: Request) -> InMemoryUserRepository:
    return request.app.state.user_repository


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_metrics(request: Request) -> MetricsCollector:
    return request.app.state.metrics
