from blog_api.dependencies.dependencies import (
    AuthServiceDep,
    BlogRepoDep,
    BlogServiceDep,
    CurrentUserDep,
    OwnedBlogIdDep,
    PageQuery,
    PageQueryDep,
    RequestContext,
    RequestContextDep,
    UserRepoDep,
    get_auth_config,
    get_auth_service,
    get_blog_service,
    get_request_context,
    require_blog_owner,
    require_identity,
)

__all__ = [
    "AuthServiceDep",
    "BlogRepoDep",
    "BlogServiceDep",
    "CurrentUserDep",
    "OwnedBlogIdDep",
    "PageQuery",
    "PageQueryDep",
    "RequestContext",
    "RequestContextDep",
    "UserRepoDep",
    "get_auth_config",
    "get_auth_service",
    "get_blog_service",
    "get_request_context",
    "require_blog_owner",
    "require_identity",
]
