"""Video endpoints (same pattern as `core.services.photos`)."""

from __future__ import annotations

from core.domain import operations as ops
from core.domain.models import Comment, Like, Media, Reading, ResponseList, Video
from core.services.invoker import EndpointInvoker


class VideoMethods:
    _invoker: EndpointInvoker

    async def get_videos(
        self, user_id: str | None = None, *, reading: Reading | None = None
    ) -> ResponseList[Video]:
        """Videos a user (default: current user) is tagged in."""

        return await self._invoker.invoke(ops.GET_VIDEOS, user_id, reading=reading)

    async def post_video(
        self,
        source: Media,
        *,
        user_id: str | None = None,
        title: str | None = None,
        description: str | None = None,
    ) -> str:
        """Uploads a video through the video host and returns the new id."""

        params = {"title": title, "description": description}
        return await self._invoker.invoke(ops.POST_VIDEO, user_id, params=params, body=source)

    async def get_video(self, video_id: str, *, reading: Reading | None = None) -> Video:
        return await self._invoker.invoke(ops.GET_VIDEO, video_id, reading=reading)

    async def get_video_likes(
        self, video_id: str, *, reading: Reading | None = None
    ) -> ResponseList[Like]:
        return await self._invoker.invoke(ops.GET_VIDEO_LIKES, video_id, reading=reading)

    async def like_video(self, video_id: str) -> bool:
        return await self._invoker.invoke(ops.LIKE_VIDEO, video_id)

    async def unlike_video(self, video_id: str) -> bool:
        return await self._invoker.invoke(ops.UNLIKE_VIDEO, video_id)

    async def get_video_comments(
        self, video_id: str, *, reading: Reading | None = None
    ) -> ResponseList[Comment]:
        return await self._invoker.invoke(ops.GET_VIDEO_COMMENTS, video_id, reading=reading)

    async def comment_video(self, video_id: str, message: str) -> str:
        if not message:
            raise ValueError("comment message must not be empty")
        return await self._invoker.invoke(ops.COMMENT_VIDEO, video_id, params={"message": message})

    async def get_video_cover(self, video_id: str) -> str:
        return await self._invoker.invoke(ops.GET_VIDEO_COVER, video_id)
