from fastapi import HTTPException, Request, status

from conehub.services.teams import TeamService


async def get_team_service(request: Request) -> TeamService:
    service = getattr(request.app.state, "team_service", None)
    if service is None:
        # lifespan ещё не отработал или упал при старте
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Team store is not initialised",
        )
    return service
