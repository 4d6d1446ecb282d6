"""
Composable access guards.

A guard is a predicate over the resolved user returning ``Allowed`` or
``Denied``. ``authorize`` runs ``authenticated`` and then each extra predicate
in order and stops at the first denial. ``require`` wraps this into a FastAPI
dependency that turns a denial into a JSON error for API paths and into a
redirect for page paths.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from fastapi import Depends, Request

from teamtrain.core.config import settings
from teamtrain.core.dependencies import get_optional_user
from teamtrain.core.errors import AppError, AuthError, AuthorizationError, PageRedirect
from teamtrain.models.user import User, RoleEnum

LOGIN_PAGE = "/login"
HOME_PAGE = "/"


@dataclass(frozen=True)
class Allowed:
    user: User


@dataclass(frozen=True)
class Denied:
    error: AppError
    redirect_to: str


Decision = Union[Allowed, Denied]
Predicate = Callable[[User], Decision]


def authenticated(user: Optional[User]) -> Decision:
    if user is None:
        return Denied(error=AuthError(), redirect_to=LOGIN_PAGE)
    return Allowed(user)


def role_in(*roles: RoleEnum) -> Predicate:
    def check(user: User) -> Decision:
        if user.role not in roles:
            return Denied(error=AuthorizationError(), redirect_to=HOME_PAGE)
        return Allowed(user)
    return check


def authorize(user: Optional[User], *predicates: Predicate) -> Decision:
    decision = authenticated(user)
    for predicate in predicates:
        if isinstance(decision, Denied):
            break
        decision = predicate(decision.user)
    return decision


def is_api_request(request: Request) -> bool:
    path = request.url.path
    return path == settings.API_PREFIX or path.startswith(settings.API_PREFIX + "/")


def require(*predicates: Predicate):
    """Dependency factory: the authorized user, or a JSON error / redirect."""
    async def guard(request: Request, user: Optional[User] = Depends(get_optional_user)) -> User:
        decision = authorize(user, *predicates)
        if isinstance(decision, Allowed):
            return decision.user
        if is_api_request(request):
            raise decision.error
        raise PageRedirect(decision.redirect_to)
    return guard


get_current_user = require()
require_admin = require(role_in(RoleEnum.admin))
