"""API routes for review search and preference capture."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status

from src.api.deps import PreferenceStoreDep, SearchServiceDep
from src.logging_config import get_logger
from src.observability.metrics import track_preferences_saved
from src.preferences.models import ContentPreferences, MusicPreferences
from src.search.models import SearchRequest, SearchResponse

logger = get_logger(__name__)


router = APIRouter(prefix="/api", tags=["Search"])
preferences_router = APIRouter(prefix="/api/preferences", tags=["Preferences"])


@router.post(
    "/search",
    response_model=SearchResponse,
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": SearchRequest.model_json_schema()},
            },
        },
    },
)
async def search_endpoint(
    service: SearchServiceDep,
    body: Annotated[Any, Body()] = None,
) -> SearchResponse:
    """Find the music reviews closest in meaning to a query.

    The body is read leniently so that a missing body, ``null`` or a
    missing query are all rejected with 400 rather than a schema error.
    Any embedding or vector store failure yields 500 without downstream
    detail.
    """
    request = SearchRequest.from_body(body)
    results = await service.search(request.query)
    return SearchResponse(result=results)


@preferences_router.post("/music", status_code=status.HTTP_201_CREATED)
def save_music_preferences(
    preferences: MusicPreferences,
    store: PreferenceStoreDep,
) -> dict[str, Any]:
    """Validate and store a user's music preferences locally."""
    store.save(preferences)
    track_preferences_saved("music")
    return {"status": "saved", "preferences": preferences.model_dump(mode="json")}


@preferences_router.get("/music/{user_id}", response_model=MusicPreferences)
def get_music_preferences(user_id: str, store: PreferenceStoreDep) -> MusicPreferences:
    """Return the stored music preferences of a user."""
    return store.get(user_id)


@preferences_router.post("/content")
async def update_content_preferences(preferences: ContentPreferences) -> dict[str, Any]:
    """Acknowledge recommendation preferences.

    These preferences are validated and echoed back; nothing is stored.
    """
    track_preferences_saved("content")
    logger.info(
        "Content preferences received",
        extra={"content_types": [t.value for t in preferences.content_types]},
    )
    return {
        "title": "Preferences Updated",
        "description": "Your recommendation preferences have been saved successfully.",
        "preferences": preferences.model_dump(mode="json"),
    }
