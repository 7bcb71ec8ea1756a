"""Rutas para publicar chistes."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.jokes import create_joke as create_joke_uc
from app.application.use_cases.notifications import JokeCreatedNotifier
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user, get_joke_notifier
from app.interfaces.api.schemas import JokeCreate, JokeRead

router = APIRouter(prefix="/jokes", tags=["jokes"])


@router.post("/", response_model=JokeRead, status_code=status.HTTP_201_CREATED)
async def create_joke(
    joke_in: JokeCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    notifier: JokeCreatedNotifier = Depends(get_joke_notifier),
) -> JokeRead:
    """Publish a joke and notify its author and the administrators."""

    try:
        joke = await create_joke_uc(
            db,
            author_id=current_user.id,
            text=joke_in.text,
            origin=joke_in.origin,
            notifier=notifier,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return JokeRead.model_validate(joke)
