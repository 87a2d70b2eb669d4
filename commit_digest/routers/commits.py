from typing import List

from fastapi import APIRouter, HTTPException

from commit_digest.core.errors import ApiError, AuthError, TransportError, ValidationError
from commit_digest.models.schemas import AggregateRequest, DisplayRow
from commit_digest.services import aggregate_service

router = APIRouter(prefix="/commits", tags=["commits"])


@router.post("/aggregate", response_model=List[DisplayRow])
def aggregate_commits(payload: AggregateRequest):
    """
    Commits of every member project in [since, until], grouped by day and project.
    """
    try:
        return aggregate_service.aggregate(
            payload.credentials(), payload.window(), author_email=payload.email
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except AuthError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except ApiError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except TransportError as exc:
        raise HTTPException(status_code=504, detail=str(exc)) from exc
