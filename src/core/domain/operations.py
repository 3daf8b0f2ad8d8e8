"""Catálogo estático de operaciones.

Idea:
- En vez de una función a medida por endpoint, cada acción lógica es un
  `OperationDescriptor` (método HTTP + plantilla de path + forma del
  resultado) y un único invocador genérico los ejecuta todos.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel

from core.domain.models import Comment, Like, Photo, Tag, Video


class ResultShape(str, Enum):
    """Forma declarada del resultado de una operación."""

    ENTITY = "entity"
    COLLECTION = "collection"
    ACK = "ack"
    IDENTIFIER = "identifier"
    URL = "url"


@dataclass(frozen=True)
class OperationDescriptor:
    """Mapeo estático acción lógica -> endpoint HTTP."""

    name: str
    method: str
    path_template: str
    shape: ResultShape
    model: type[BaseModel] | None = None
    default_id: str | None = None
    fixed_params: dict[str, Any] = field(default_factory=dict)
    upload_host: str | None = None

    @property
    def needs_id(self) -> bool:
        return "{id}" in self.path_template


# Photos
GET_PHOTOS = OperationDescriptor(
    "get_photos", "GET", "/{id}/photos", ResultShape.COLLECTION, Photo, default_id="me"
)
POST_PHOTO = OperationDescriptor(
    "post_photo", "POST", "/{id}/photos", ResultShape.IDENTIFIER, default_id="me"
)
DELETE_PHOTO = OperationDescriptor("delete_photo", "DELETE", "/{id}", ResultShape.ACK)
GET_PHOTO = OperationDescriptor("get_photo", "GET", "/{id}", ResultShape.ENTITY, Photo)
GET_PHOTO_COMMENTS = OperationDescriptor(
    "get_photo_comments", "GET", "/{id}/comments", ResultShape.COLLECTION, Comment
)
COMMENT_PHOTO = OperationDescriptor(
    "comment_photo", "POST", "/{id}/comments", ResultShape.IDENTIFIER
)
GET_PHOTO_LIKES = OperationDescriptor(
    "get_photo_likes", "GET", "/{id}/likes", ResultShape.COLLECTION, Like
)
LIKE_PHOTO = OperationDescriptor("like_photo", "POST", "/{id}/likes", ResultShape.ACK)
UNLIKE_PHOTO = OperationDescriptor("unlike_photo", "DELETE", "/{id}/likes", ResultShape.ACK)
GET_PHOTO_URL = OperationDescriptor(
    "get_photo_url",
    "GET",
    "/{id}/picture",
    ResultShape.URL,
    fixed_params={"redirect": "false"},
)
GET_TAGS_ON_PHOTO = OperationDescriptor(
    "get_tags_on_photo", "GET", "/{id}/tags", ResultShape.COLLECTION, Tag
)
ADD_TAG_TO_PHOTO = OperationDescriptor("add_tag_to_photo", "POST", "/{id}/tags", ResultShape.ACK)
UPDATE_TAG_ON_PHOTO = OperationDescriptor(
    "update_tag_on_photo", "POST", "/{id}/tags", ResultShape.ACK
)

# Videos
GET_VIDEOS = OperationDescriptor(
    "get_videos", "GET", "/{id}/videos", ResultShape.COLLECTION, Video, default_id="me"
)
POST_VIDEO = OperationDescriptor(
    "post_video",
    "POST",
    "/{id}/videos",
    ResultShape.IDENTIFIER,
    default_id="me",
    upload_host="video",
)
GET_VIDEO = OperationDescriptor("get_video", "GET", "/{id}", ResultShape.ENTITY, Video)
GET_VIDEO_LIKES = OperationDescriptor(
    "get_video_likes", "GET", "/{id}/likes", ResultShape.COLLECTION, Like
)
LIKE_VIDEO = OperationDescriptor("like_video", "POST", "/{id}/likes", ResultShape.ACK)
UNLIKE_VIDEO = OperationDescriptor("unlike_video", "DELETE", "/{id}/likes", ResultShape.ACK)
GET_VIDEO_COMMENTS = OperationDescriptor(
    "get_video_comments", "GET", "/{id}/comments", ResultShape.COLLECTION, Comment
)
COMMENT_VIDEO = OperationDescriptor(
    "comment_video", "POST", "/{id}/comments", ResultShape.IDENTIFIER
)
GET_VIDEO_COVER = OperationDescriptor(
    "get_video_cover",
    "GET",
    "/{id}/picture",
    ResultShape.URL,
    fixed_params={"redirect": "false"},
)
