"""Blog routes: create, read, search, filter, update and delete."""

from typing import Annotated

from fastapi import APIRouter, Query, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from blog_api.dependencies import (
    BlogServiceDep,
    CurrentUserDep,
    OwnedBlogIdDep,
    PageQueryDep,
)
from blog_api.managers import READ_LIMIT, WRITE_LIMIT, limiter
from blog_api.schemas.blog import BlogCreate, BlogResponse, BlogUpdate, PaginatedBlogs

router = APIRouter(prefix="/blogs", tags=["📝 Blogs"])

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
}
UNAUTHORIZED_RESPONSE = {
    "description": "Unauthorized",
    "content": {
        "application/json": {
            "example": {"detail": "You are not authorized to perform this action"},
        },
    },
}


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    status_code=HTTP_201_CREATED,
    summary="Create blog",
    description="Create a blog owned by the authenticated user.",
    responses={
        401: UNAUTHORIZED_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
        500: {
            "description": "Blog or owner could not be written",
            "content": {"application/json": {"example": {"detail": "Failed to create blog"}}},
        },
    },
    operation_id="blogs_create",
)
@limiter.limit(WRITE_LIMIT)
async def create_blog(
    request: Request,
    response: Response,
    blog: BlogCreate,
    current_user: CurrentUserDep,
    blog_service: BlogServiceDep,
) -> BlogResponse:
    """
    Create a new blog.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog : BlogCreate
        Title, content and category.
    current_user : UserDB
        Authenticated user; becomes the owner.
    blog_service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogResponse
        The created blog with its owner.
    """
    db_blog = await blog_service.create(blog, current_user.id)
    return BlogResponse.from_db(db_blog, current_user)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[BlogResponse],
    summary="List blogs",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="blogs_list",
)
@limiter.limit(READ_LIMIT)
async def list_blogs(
    request: Request,
    response: Response,
    blog_service: BlogServiceDep,
) -> list[BlogResponse]:
    return await blog_service.list_all()


@router.get(
    "/paginated",
    response_class=ORJSONResponse,
    response_model=PaginatedBlogs,
    summary="List blogs page by page",
    description="Return one page of blogs and the total number of blogs.",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="blogs_paginated",
)
@limiter.limit(READ_LIMIT)
async def paginate_blogs(
    request: Request,
    response: Response,
    query: PageQueryDep,
    blog_service: BlogServiceDep,
) -> PaginatedBlogs:
    """
    Get a page of blogs.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    query : PageQuery
        Positive page number and page size.
    blog_service : BlogService
        Blog service dependency.

    Returns
    -------
    PaginatedBlogs
        The page and the total count.
    """
    return await blog_service.paginate(query.page, query.limit)


@router.get(
    "/search",
    response_class=ORJSONResponse,
    response_model=list[BlogResponse],
    summary="Search blogs",
    description="Case-insensitive search in blog titles and contents.",
    responses={
        400: {
            "description": "Bad Request",
            "content": {"application/json": {"example": {"detail": "Keyword is required"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_search",
)
@limiter.limit(READ_LIMIT)
async def search_blogs(
    request: Request,
    response: Response,
    blog_service: BlogServiceDep,
    keyword: Annotated[str | None, Query(description="Text to look for")] = None,
) -> list[BlogResponse]:
    return await blog_service.search(keyword)


@router.get(
    "/filter",
    response_class=ORJSONResponse,
    response_model=list[BlogResponse],
    summary="Filter blogs",
    description="Filter blogs by category and/or owner ID.",
    responses={
        400: {
            "description": "Bad Request",
            "content": {"application/json": {"example": {"detail": "Invalid owner ID"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_filter",
)
@limiter.limit(READ_LIMIT)
async def filter_blogs(
    request: Request,
    response: Response,
    blog_service: BlogServiceDep,
    category: Annotated[str | None, Query(description="Exact category")] = None,
    owner: Annotated[str | None, Query(description="Owner ID")] = None,
) -> list[BlogResponse]:
    return await blog_service.filter_by(category=category, owner=owner)


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Get blog by ID",
    responses={
        400: {
            "description": "Bad Request",
            "content": {"application/json": {"example": {"detail": "Invalid blog ID"}}},
        },
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "Blog not found"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_get",
)
@limiter.limit(READ_LIMIT)
async def get_blog(
    request: Request,
    response: Response,
    blog_id: str,
    blog_service: BlogServiceDep,
) -> BlogResponse:
    """
    Get blog by ID.

    Raises
    ------
    InvalidIdentifierError
        If `blog_id` is not a UUID.
    BlogNotFoundError
        If no blog has this ID.
    """
    return await blog_service.find_by_id(blog_id)


@router.patch(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Update blog",
    description="Partially update a blog. Only the owner may update it.",
    responses={401: UNAUTHORIZED_RESPONSE, 429: RATE_LIMIT_RESPONSE},
    operation_id="blogs_update",
)
@limiter.limit(WRITE_LIMIT)
async def update_blog(
    request: Request,
    response: Response,
    owned_blog_id: OwnedBlogIdDep,
    blog_update: BlogUpdate,
    blog_service: BlogServiceDep,
) -> BlogResponse:
    return await blog_service.update(owned_blog_id, blog_update)


@router.delete(
    "/{blog_id}",
    response_class=ORJSONResponse,
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete blog",
    description="Delete a blog. Only the owner may delete it.",
    responses={
        204: {"description": "No Content"},
        401: UNAUTHORIZED_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
        500: {
            "description": "Removal failed",
            "content": {"application/json": {"example": {"detail": "Failed to remove blog"}}},
        },
    },
    operation_id="blogs_delete",
)
@limiter.limit(WRITE_LIMIT)
async def delete_blog(
    request: Request,
    response: Response,
    owned_blog_id: OwnedBlogIdDep,
    current_user: CurrentUserDep,
    blog_service: BlogServiceDep,
) -> None:
    """
    Delete blog by ID.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    owned_blog_id : UUID
        Blog identifier, already checked for ownership.
    current_user : UserDB
        Authenticated owner.
    blog_service : BlogService
        Blog service dependency.

    Raises
    ------
    RemovalFailedError
        If deleting or unlinking the blog fails.
    """
    await blog_service.remove(owned_blog_id, current_user.id)
