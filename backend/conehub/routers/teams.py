from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from conehub.api.deps import get_team_service
from conehub.core.errors import (
    AuthenticationError,
    NotFoundError,
    StoreConflictError,
    StoreError,
    ValidationError,
)
from conehub.schemas.error import ErrorDetail
from conehub.schemas.schedule import WeekScheduleOut
from conehub.schemas.team import (
    MemberOut,
    TeamAuthIn,
    TeamDeleteIn,
    TeamOut,
    TeamRegisterIn,
)
from conehub.services.schedule import build_week
from conehub.services.teams import TeamService

router = APIRouter(prefix="/teams", tags=["teams"])


def _validation_error(e: ValidationError) -> HTTPException:
    detail = ErrorDetail(code=e.reason.value, message=e.message)
    return HTTPException(status_code=400, detail=detail.model_dump())


def _store_error(e: StoreError) -> HTTPException:
    if isinstance(e, StoreConflictError):
        return HTTPException(status_code=409, detail=str(e))
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"{e}. Please try again.",
    )


def _auth_error(e: AuthenticationError) -> HTTPException:
    # неверный id и неверный пароль снаружи неразличимы
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))


@router.post("", response_model=TeamOut, status_code=status.HTTP_201_CREATED)
async def register_team(
    payload: TeamRegisterIn,
    service: TeamService = Depends(get_team_service),
):
    try:
        return await service.register(
            name=payload.name,
            lead_name=payload.lead_name,
            password=payload.password,
            confirm_password=payload.confirm_password,
        )
    except ValidationError as e:
        raise _validation_error(e) from e
    except StoreError as e:
        raise _store_error(e) from e


@router.post("/auth", response_model=TeamOut)
async def authenticate_team(
    payload: TeamAuthIn,
    service: TeamService = Depends(get_team_service),
):
    try:
        return await service.authenticate(payload.team_id, payload.password)
    except ValidationError as e:
        raise _validation_error(e) from e
    except AuthenticationError as e:
        raise _auth_error(e) from e
    except StoreError as e:
        raise _store_error(e) from e


@router.get("", response_model=list[TeamOut])
async def list_recent_teams(
    limit: int = Query(20, gt=0),
    service: TeamService = Depends(get_team_service),
):
    try:
        return await service.list_recent(limit)
    except StoreError as e:
        raise _store_error(e) from e


@router.get("/{team_id}", response_model=TeamOut)
async def get_team(
    team_id: str,
    service: TeamService = Depends(get_team_service),
):
    try:
        return await service.get_team(team_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail="Team not found") from e
    except StoreError as e:
        raise _store_error(e) from e


@router.get("/{team_id}/members", response_model=list[MemberOut])
async def list_team_members(
    team_id: str,
    service: TeamService = Depends(get_team_service),
):
    try:
        return await service.list_members(team_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail="Team not found") from e
    except StoreError as e:
        raise _store_error(e) from e


@router.get("/{team_id}/schedule", response_model=WeekScheduleOut)
async def get_team_schedule(
    team_id: str,
    week_start: date | None = Query(default=None),
    service: TeamService = Depends(get_team_service),
):
    try:
        team = await service.get_team(team_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail="Team not found") from e
    except StoreError as e:
        raise _store_error(e) from e

    return build_week(team.id, week_start)


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team(
    team_id: str,
    payload: TeamDeleteIn | None = None,
    service: TeamService = Depends(get_team_service),
):
    password = payload.password if payload else None
    try:
        await service.delete_team(team_id, password)
    except ValidationError as e:
        raise _validation_error(e) from e
    except AuthenticationError as e:
        if not service.require_password_on_delete:
            raise HTTPException(status_code=404, detail="Team not found") from e
        raise _auth_error(e) from e
    except StoreError as e:
        raise _store_error(e) from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)
