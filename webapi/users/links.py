from typing import Optional

from fastapi import Request

from webapi.users.models import Page

LIST_ROUTE_NAME = "get_users"


def build_page_link(request: Request, page_number: int, page_size: int) -> str:
    """Absolute URL of the list endpoint for the given page."""
    url = request.url_for(LIST_ROUTE_NAME)
    return str(url.include_query_params(pageNumber=page_number, pageSize=page_size))


def previous_page_link(request: Request, page: Page) -> Optional[str]:
    if not page.has_previous:
        return None
    return build_page_link(request, page.current_page - 1, page.page_size)


def next_page_link(request: Request, page: Page) -> Optional[str]:
    if not page.has_next:
        return None
    return build_page_link(request, page.current_page + 1, page.page_size)


def pagination_header(request: Request, page: Page) -> dict:
    """Metadata sent in the ``X-Pagination`` header."""
    return {
        "previousPageLink": previous_page_link(request, page),
        "nextPageLink": next_page_link(request, page),
        "totalCount": page.total_count,
        "pageSize": page.page_size,
        "currentPage": page.current_page,
        "totalPages": page.total_pages,
    }
