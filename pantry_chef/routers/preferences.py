import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from pantry_chef.database import get_db
from pantry_chef.models.preferences import UserPreferences
from pantry_chef.schemas.preferences import (
    PreferencesUpdate, PreferencesResponse, PreferenceOptionsResponse,
)
from pantry_chef.services.recipe_codec import preferences_fields, preferences_to_dict

logger = logging.getLogger(__name__)

router = APIRouter()


def get_user_id(request: Request) -> str:
    return request.app.state.settings.DEFAULT_USER_ID


def _get_row(db: Session, user_id: str) -> UserPreferences | None:
    return db.query(UserPreferences).filter(UserPreferences.user_id == user_id).first()


@router.get("/", response_model=PreferencesResponse)
def get_preferences(db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    prefs = _get_row(db, user_id)
    if not prefs:
        return PreferencesResponse(user_id=user_id)
    return preferences_to_dict(prefs)


@router.get("/options", response_model=PreferenceOptionsResponse)
def get_options():
    return PreferenceOptionsResponse()


@router.put("/", response_model=PreferencesResponse)
def save_preferences(
    body: PreferencesUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    fields = preferences_fields(body.model_dump())
    prefs = _get_row(db, user_id)
    if prefs:
        for k, v in fields.items():
            setattr(prefs, k, v)
    else:
        prefs = UserPreferences(user_id=user_id, **fields)
        db.add(prefs)
    db.commit()
    logger.info(f"Saved preferences for {user_id}")
    return preferences_to_dict(_get_row(db, user_id))
