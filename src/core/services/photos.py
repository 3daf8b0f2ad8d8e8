"""Photo endpoints.

Each method is a single `EndpointInvoker.invoke` call with a static
descriptor; the overloads of the remote API (with/without reading options,
current user vs. explicit user) collapse into keyword arguments.
"""

from __future__ import annotations

from typing import Sequence

from core.domain import operations as ops
from core.domain.models import Comment, Like, Media, Photo, Reading, ResponseList, Tag, TagUpdate
from core.services.invoker import EndpointInvoker


def _tag_params(target: str | Sequence[str] | TagUpdate) -> tuple[dict[str, object], TagUpdate | None]:
    if isinstance(target, TagUpdate):
        return {}, target
    if isinstance(target, str):
        return {"to": target}, None
    ids = list(target)
    if not ids or not all(isinstance(uid, str) and uid for uid in ids):
        raise ValueError("tag targets must be non-empty user ids")
    return {"tags": [{"tag_uid": uid} for uid in ids]}, None


class PhotoMethods:
    _invoker: EndpointInvoker

    async def get_photos(
        self, user_id: str | None = None, *, reading: Reading | None = None
    ) -> ResponseList[Photo]:
        """Photos a user (default: current user) is tagged in."""

        return await self._invoker.invoke(ops.GET_PHOTOS, user_id, reading=reading)

    async def post_photo(
        self,
        source: Media,
        *,
        user_id: str | None = None,
        message: str | None = None,
        place: str | None = None,
        no_story: bool | None = None,
    ) -> str:
        """Uploads a photo and returns the new photo id."""

        params = {"message": message, "place": place, "no_story": no_story}
        return await self._invoker.invoke(ops.POST_PHOTO, user_id, params=params, body=source)

    async def delete_photo(self, photo_id: str) -> bool:
        return await self._invoker.invoke(ops.DELETE_PHOTO, photo_id)

    async def get_photo(self, photo_id: str, *, reading: Reading | None = None) -> Photo:
        return await self._invoker.invoke(ops.GET_PHOTO, photo_id, reading=reading)

    async def get_photo_comments(
        self, photo_id: str, *, reading: Reading | None = None
    ) -> ResponseList[Comment]:
        return await self._invoker.invoke(ops.GET_PHOTO_COMMENTS, photo_id, reading=reading)

    async def comment_photo(self, photo_id: str, message: str) -> str:
        """Comments on a photo; returns the comment id."""

        if not message:
            raise ValueError("comment message must not be empty")
        return await self._invoker.invoke(ops.COMMENT_PHOTO, photo_id, params={"message": message})

    async def get_photo_likes(
        self, photo_id: str, *, reading: Reading | None = None
    ) -> ResponseList[Like]:
        return await self._invoker.invoke(ops.GET_PHOTO_LIKES, photo_id, reading=reading)

    async def like_photo(self, photo_id: str) -> bool:
        return await self._invoker.invoke(ops.LIKE_PHOTO, photo_id)

    async def unlike_photo(self, photo_id: str) -> bool:
        return await self._invoker.invoke(ops.UNLIKE_PHOTO, photo_id)

    async def get_photo_url(self, photo_id: str) -> str:
        """URL of the picture file (the endpoint is asked not to redirect)."""

        return await self._invoker.invoke(ops.GET_PHOTO_URL, photo_id)

    async def get_tags_on_photo(
        self, photo_id: str, *, reading: Reading | None = None
    ) -> ResponseList[Tag]:
        return await self._invoker.invoke(ops.GET_TAGS_ON_PHOTO, photo_id, reading=reading)

    async def add_tag_to_photo(
        self, photo_id: str, target: str | Sequence[str] | TagUpdate
    ) -> bool:
        """Tags one user, several users, or a positioned tag on a photo."""

        params, body = _tag_params(target)
        return await self._invoker.invoke(ops.ADD_TAG_TO_PHOTO, photo_id, params=params, body=body)

    async def update_tag_on_photo(self, photo_id: str, target: str | TagUpdate) -> bool:
        params, body = _tag_params(target)
        return await self._invoker.invoke(
            ops.UPDATE_TAG_ON_PHOTO, photo_id, params=params, body=body
        )
