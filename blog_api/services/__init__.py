from blog_api.services.auth import AuthService
from blog_api.services.blog import BlogService, SagaState

__all__ = ["AuthService", "BlogService", "SagaState"]
