"""Identity routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from unid.application.usecase.auth import LoginUseCase
from unid.application.usecase.auth.login import LoginRequest, LoginResponse
from unid.application.usecase.identity import (
    BindAuthMethodUseCase,
    GetIdentityInfoUseCase,
    MergeIdentitiesUseCase,
    RegisterIdentityUseCase,
    UnbindAuthMethodUseCase,
)
from unid.application.usecase.identity.bind_auth_method import (
    BindAuthMethodRequest,
    BindAuthMethodResponse,
)
from unid.application.usecase.identity.get_identity_info import (
    GetIdentityInfoRequest,
    GetIdentityInfoResponse,
)
from unid.application.usecase.identity.merge_identities import (
    MergeIdentitiesRequest,
    MergeIdentitiesResponse,
)
from unid.application.usecase.identity.register_identity import (
    RegisterIdentityRequest,
    RegisterIdentityResponse,
)
from unid.application.usecase.identity.unbind_auth_method import (
    UnbindAuthMethodRequest,
    UnbindAuthMethodResponse,
)
from unid.domain.value import AuthType
from unid.interface.api.security import bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/identity", tags=["identity"], route_class=DishkaRoute)


class MergeBody(BaseModel):
    """Tokens of the two identities to merge."""

    reserved_user_token: str
    deleted_user_token: str


class BindBody(BaseModel):
    """Method to bind to the caller's identity."""

    auth_type: AuthType
    auth_value: str


class UnbindBody(BaseModel):
    """Method type to remove from the caller's identity."""

    auth_type: AuthType


@router.post("/merge", response_model=MergeIdentitiesResponse)
async def merge_identities(
    body: MergeBody,
    merge_use_case: FromDishka[MergeIdentitiesUseCase],
    token: str = Depends(bearer_token),
) -> MergeIdentitiesResponse:
    """Merge the deleted identity into the reserved one.

    The caller must be one of the two identities.

    Args:
        body: Tokens of the reserved and deleted identities
        merge_use_case: Merge use case from DI
        token: Caller's bearer token

    Returns:
        Merge summary with the transferred methods
    """
    response = await merge_use_case.execute(
        MergeIdentitiesRequest(
            token=token,
            reserved_user_token=body.reserved_user_token,
            deleted_user_token=body.deleted_user_token,
        )
    )
    logger.info(
        "Merged identity %s into %s", response.deleted_user_id, response.universal_id
    )
    return response


@router.get("/info", response_model=GetIdentityInfoResponse)
async def get_identity_info(
    info_use_case: FromDishka[GetIdentityInfoUseCase],
    token: str = Depends(bearer_token),
) -> GetIdentityInfoResponse:
    """Get the caller's identity and its bound methods."""
    return await info_use_case.execute(GetIdentityInfoRequest(token=token))


@router.post("/bind", response_model=BindAuthMethodResponse)
async def bind_auth_method(
    body: BindBody,
    bind_use_case: FromDishka[BindAuthMethodUseCase],
    token: str = Depends(bearer_token),
) -> BindAuthMethodResponse:
    """Bind another login method to the caller's identity.

    Args:
        body: Method to bind
        bind_use_case: Bind use case from DI
        token: Caller's bearer token

    Returns:
        The binding
    """
    return await bind_use_case.execute(
        BindAuthMethodRequest(
            token=token, auth_type=body.auth_type, auth_value=body.auth_value
        )
    )


@router.post("/unbind", response_model=UnbindAuthMethodResponse)
async def unbind_auth_method(
    body: UnbindBody,
    unbind_use_case: FromDishka[UnbindAuthMethodUseCase],
    token: str = Depends(bearer_token),
) -> UnbindAuthMethodResponse:
    """Remove one login method of the given type from the caller's identity."""
    return await unbind_use_case.execute(
        UnbindAuthMethodRequest(token=token, auth_type=body.auth_type)
    )


@router.post("/register", response_model=RegisterIdentityResponse)
async def register_identity(
    request: RegisterIdentityRequest,
    register_use_case: FromDishka[RegisterIdentityUseCase],
) -> RegisterIdentityResponse:
    """Register a new identity with its initial login methods."""
    response = await register_use_case.execute(request)
    logger.info("Registered identity %s", response.universal_id)
    return response


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> LoginResponse:
    """Log in with any bound method and receive a bearer token."""
    return await login_use_case.execute(request)
