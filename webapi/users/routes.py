import json
import uuid
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response

from webapi.config.dependencies import get_user_service
from webapi.shared.negotiation import ensure_acceptable, render
from webapi.users.links import LIST_ROUTE_NAME, pagination_header
from webapi.users.schemas import PatchOperation, UserInfoDto
from webapi.users.services import UserService

router = APIRouter(prefix="/users", tags=["users"])

ALLOWED_COLLECTION_METHODS = "POST, GET, OPTIONS"


def _created(request: Request, user_id: uuid.UUID) -> Response:
    location = str(request.url_for("get_user_by_id", user_id=str(user_id)))
    return render(request, user_id, status_code=201, headers={"Location": location}, root="guid")


@router.api_route(
    "/{user_id}",
    methods=["GET", "HEAD"],
    name="get_user_by_id",
    dependencies=[Depends(ensure_acceptable)],
)
async def get_user_by_id(
    user_id: uuid.UUID,
    request: Request,
    service: UserService = Depends(get_user_service),
):
    user = service.get_user(user_id)
    return render(request, user, root="UserDto")


@router.post("", name="create_user", dependencies=[Depends(ensure_acceptable)])
async def create_user(
    request: Request,
    user: Optional[UserInfoDto] = Body(default=None),
    service: UserService = Depends(get_user_service),
):
    user_id = service.create_user(user)
    return _created(request, user_id)


@router.put("/{user_id}", name="update_user", dependencies=[Depends(ensure_acceptable)])
async def update_user(
    user_id: uuid.UUID,
    request: Request,
    user: Optional[UserInfoDto] = Body(default=None),
    service: UserService = Depends(get_user_service),
):
    stored_id, inserted = service.replace_user(user_id, user)
    if inserted:
        return _created(request, stored_id)
    return Response(status_code=204)


@router.patch("/{user_id}", name="partially_update_user")
async def partially_update_user(
    user_id: uuid.UUID,
    patch_document: Optional[List[PatchOperation]] = Body(default=None),
    service: UserService = Depends(get_user_service),
):
    service.patch_user(user_id, patch_document)
    return Response(status_code=204)


@router.delete("/{user_id}", name="delete_user")
async def delete_user(
    user_id: uuid.UUID,
    service: UserService = Depends(get_user_service),
):
    service.delete_user(user_id)
    return Response(status_code=204)


@router.get("", name=LIST_ROUTE_NAME, dependencies=[Depends(ensure_acceptable)])
async def get_users(
    request: Request,
    page_number: Optional[int] = Query(default=None, alias="pageNumber"),
    page_size: Optional[int] = Query(default=None, alias="pageSize"),
    service: UserService = Depends(get_user_service),
):
    pagination = service.pagination
    page = service.list_users(
        page_number if page_number is not None else pagination.default_page_number,
        page_size if page_size is not None else pagination.default_page_size,
    )
    headers = {"X-Pagination": json.dumps(pagination_header(request, page))}
    return render(request, page.items, headers=headers, root="ArrayOfUserDto", item="UserDto")


@router.options("", name="get_users_options")
async def get_users_options():
    return Response(status_code=200, headers={"Allow": ALLOWED_COLLECTION_METHODS})
