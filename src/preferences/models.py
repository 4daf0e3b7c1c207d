"""Preference form schemas."""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

Percent = Annotated[int, Field(ge=0, le=100)]


class MusicGenre(str, Enum):
    """Genres offered by the music preferences form."""

    ROCK = "rock"
    POP = "pop"
    HIP_HOP = "hip-hop"
    RNB = "rnb"
    JAZZ = "jazz"
    CLASSICAL = "classical"
    ELECTRONIC = "electronic"
    COUNTRY = "country"
    FOLK = "folk"
    METAL = "metal"
    BLUES = "blues"
    REGGAE = "reggae"
    INDIE = "indie"
    LATIN = "latin"
    KPOP = "kpop"


class Mood(str, Enum):
    """Mood tags offered by the music preferences form."""

    ENERGETIC = "energetic"
    RELAXING = "relaxing"
    HAPPY = "happy"
    MELANCHOLIC = "melancholic"
    ROMANTIC = "romantic"
    FOCUS = "focus"
    WORKOUT = "workout"
    PARTY = "party"
    CHILL = "chill"
    NOSTALGIC = "nostalgic"


class ContentType(str, Enum):
    MOVIES = "movies"
    TV = "tv"
    BOOKS = "books"
    MUSIC = "music"
    PODCASTS = "podcasts"


class ContentGenre(str, Enum):
    ACTION = "action"
    ADVENTURE = "adventure"
    COMEDY = "comedy"
    DRAMA = "drama"
    FANTASY = "fantasy"
    HORROR = "horror"
    MYSTERY = "mystery"
    ROMANCE = "romance"
    SCI_FI = "sci-fi"
    THRILLER = "thriller"
    DOCUMENTARY = "documentary"


class ContentRating(str, Enum):
    ALL = "all"
    FAMILY = "family"
    MATURE = "mature"


class ReleaseTimeframe(str, Enum):
    ANY = "any"
    NEW = "new"
    RECENT = "recent"
    CLASSIC = "classic"


class UpdateFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class MusicPreferences(BaseModel):
    """A listener's music taste.

    Every multi-select needs at least one choice and favourite artists
    need at least three characters.
    """

    user_id: str = Field(default="local", min_length=1, description="Owner of the preferences")
    genres_positive: list[MusicGenre] = Field(min_length=1, description="Genres the user likes")
    genres_negative: list[MusicGenre] = Field(min_length=1, description="Genres the user dislikes")
    favorite_artists: str = Field(min_length=3, description="Favourite artists, free text")
    tempo_preference: Percent = Field(default=50, description="Slow (0) to fast (100)")
    mood_preference: list[Mood] = Field(min_length=1, description="Preferred moods")
    instrumental_vocal: Percent = Field(
        default=50, description="Instrumental (0) to vocal (100)"
    )

    @field_validator("favorite_artists")
    @classmethod
    def _strip_artists(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Please enter at least one artist.")
        return value


class ContentPreferences(BaseModel):
    """General recommendation preferences across content types."""

    content_types: list[ContentType] = Field(
        default_factory=lambda: [ContentType.MOVIES, ContentType.TV],
        min_length=1,
    )
    genres: list[ContentGenre] = Field(min_length=1)
    content_rating: ContentRating = ContentRating.ALL
    release_timeframe: ReleaseTimeframe = ReleaseTimeframe.ANY
    popularity_preference: Percent = 50
    discovery_mode: bool = False
    update_frequency: UpdateFrequency = UpdateFrequency.WEEKLY
