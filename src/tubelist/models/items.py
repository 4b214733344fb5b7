"""
Pydantic models for decoded list entries.

Every renderer variant the decoder understands (video rows, grid videos,
playlist rows, lockup view models) is normalised into a single ``Item``
record with stable field names.

Models
------
Thumbnail
    One image rendition (URL plus dimensions).
Author
    Channel attribution for a video author or a playlist owner.
Item
    Uniform record for a video or playlist entry.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from tubelist.models.enums import ItemKind


class Thumbnail(BaseModel):
    """
    A single thumbnail rendition.

    Attributes
    ----------
    url : str
        Absolute image URL.
    width : int
        Image width in pixels (0 when upstream omits it).
    height : int
        Image height in pixels (0 when upstream omits it).
    """

    model_config = ConfigDict(frozen=True)

    url: str
    width: int = 0
    height: int = 0


class Author(BaseModel):
    """
    Channel attribution attached to a video (author) or playlist (owner).

    Attributes
    ----------
    name : str
        Channel display name.
    channel_id : str | None
        ``UC``-prefixed channel ID from the browse endpoint.
    url : str | None
        Absolute canonical channel URL.
    verified : bool
        Whether an owner badge marks the channel as verified/official.
    badges : list[str]
        Owner badge tooltips in upstream order.
    avatars : list[Thumbnail]
        Channel avatars ordered by descending width.
    """

    name: str = ""
    channel_id: str | None = None
    url: str | None = None
    verified: bool = False
    badges: list[str] = Field(default_factory=list)
    avatars: list[Thumbnail] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def best_avatar(self) -> Thumbnail | None:
        """Widest avatar, if any."""
        return self.avatars[0] if self.avatars else None


class Item(BaseModel):
    """
    Uniform record for a decoded video or playlist entry.

    Only ``type`` is required; every other field is filled independently
    when the upstream renderer carries it.

    Attributes
    ----------
    type : ItemKind
        Record kind (video or playlist).
    id : str | None
        Video ID or playlist ID.
    url : str | None
        Canonical watch or playlist URL.
    title : str
        Display name.
    thumbnails : list[Thumbnail]
        Renditions ordered by descending width.
    duration : str | None
        Human-readable duration text (videos).
    duration_seconds : int | None
        Duration in seconds when upstream provides it.
    description : str | None
        Description snippet (search results).
    author : Author | None
        Video author or playlist owner.
    views : int | None
        View count; ``None`` when absent or zero.
    uploaded_at : str | None
        Relative upload/publish time text (e.g. "3 weeks ago").
    badges : list[str]
        Item badge labels (e.g. "LIVE", "4K").
    is_live : bool
        True iff a badge label is "LIVE" or "LIVE NOW".
    is_upcoming : bool
        True for scheduled streams and premieres.
    is_premiere : bool
        True for scheduled premieres.
    video_count : int | None
        Number of videos (playlists only).
    """

    type: ItemKind
    id: str | None = None
    url: str | None = None
    title: str = ""
    thumbnails: list[Thumbnail] = Field(default_factory=list)
    duration: str | None = None
    duration_seconds: int | None = None
    description: str | None = None
    author: Author | None = None
    views: int | None = None
    uploaded_at: str | None = None
    badges: list[str] = Field(default_factory=list)
    is_live: bool = False
    is_upcoming: bool = False
    is_premiere: bool = False
    video_count: int | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def thumbnail(self) -> str | None:
        """URL of the widest thumbnail, if any."""
        return self.thumbnails[0].url if self.thumbnails else None
