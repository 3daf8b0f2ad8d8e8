"""
Client tests: photo/video facades end to end over httpx with a mock
transport (no network).

Usage:
    python -m pytest tests/test_client.py -v
"""
import asyncio
import json
import unittest
from urllib.parse import parse_qs

import httpx

from adapters.http_client import HttpxTransport, build_async_client
from core.config import AppSettings
from core.domain.errors import RequestRejected, ServiceUnavailable
from core.domain.models import Media, Photo, Reading, TagUpdate, Video
from core.services.client import GraphMediaClient


def _settings(**overrides):
    return AppSettings(_env_file=None, **overrides)


class Recorder:
    """`httpx.MockTransport` handler that records requests and replays one reply."""

    def __init__(self, status=200, payload=None, error=None):
        self.status = status
        self.payload = {"success": True} if payload is None else payload
        self.error = error
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error(f"{self.error.__name__}", request=request)
        return httpx.Response(self.status, json=self.payload)

    @property
    def last(self):
        return self.requests[-1]

    def form(self):
        return {k: v[0] for k, v in parse_qs(self.last.content.decode()).items()}


def _client(recorder, **overrides):
    settings = _settings(**overrides)
    http = build_async_client(settings, transport=httpx.MockTransport(recorder))
    return GraphMediaClient(settings, http_client=http)


class TestPhotos(unittest.IsolatedAsyncioTestCase):

    async def test_get_single_photo(self):
        recorder = Recorder(payload={"id": "123", "name": "x"})
        photo = await _client(recorder).get_photo("123")
        self.assertIsInstance(photo, Photo)
        self.assertEqual(photo.id, "123")
        self.assertEqual(recorder.last.method, "GET")
        self.assertEqual(recorder.last.url.path, "/123")
        self.assertEqual(recorder.last.url.query, b"")

    async def test_get_photos_with_reading(self):
        recorder = Recorder(payload={"data": [{"id": "1"}, {"id": "2"}]})
        page = await _client(recorder).get_photos(reading=Reading(limit=2, with_location=True))
        self.assertEqual([p.id for p in page.data], ["1", "2"])
        self.assertEqual(recorder.last.url.path, "/me/photos")
        self.assertEqual(dict(recorder.last.url.params), {"limit": "2", "with": "location"})

    async def test_like_and_unlike(self):
        recorder = Recorder()
        client = _client(recorder)
        self.assertTrue(await client.like_photo("7"))
        self.assertEqual((recorder.last.method, recorder.last.url.path), ("POST", "/7/likes"))
        self.assertTrue(await client.unlike_photo("7"))
        self.assertEqual((recorder.last.method, recorder.last.url.path), ("DELETE", "/7/likes"))

    async def test_delete_not_acknowledged(self):
        recorder = Recorder(payload={"success": False})
        self.assertFalse(await _client(recorder).delete_photo("7"))
        self.assertEqual(recorder.last.method, "DELETE")
        self.assertEqual(recorder.last.url.path, "/7")

    async def test_comment_photo(self):
        recorder = Recorder(payload={"id": "7_99"})
        comment_id = await _client(recorder).comment_photo("7", "nice")
        self.assertEqual(comment_id, "7_99")
        self.assertEqual(recorder.last.url.path, "/7/comments")
        self.assertEqual(recorder.form(), {"message": "nice"})

    async def test_comment_requires_message(self):
        with self.assertRaises(ValueError):
            await _client(Recorder()).comment_photo("7", "")

    async def test_post_photo_multipart(self):
        recorder = Recorder(payload={"id": "555", "post_id": "1_555"})
        media = Media(content=b"JPEGDATA", filename="cat.jpg", mime_type="image/jpeg")
        new_id = await _client(recorder).post_photo(media, message="hello", no_story=True)
        self.assertEqual(new_id, "555")
        request = recorder.last
        self.assertEqual(request.url.path, "/me/photos")
        self.assertTrue(request.headers["content-type"].startswith("multipart/form-data"))
        body = request.content
        self.assertIn(b'name="source"; filename="cat.jpg"', body)
        self.assertIn(b"JPEGDATA", body)
        self.assertIn(b'name="message"', body)
        self.assertIn(b'name="no_story"', body)
        self.assertNotIn(b'name="place"', body)

    async def test_add_tag_single_user(self):
        recorder = Recorder()
        self.assertTrue(await _client(recorder).add_tag_to_photo("1", "42"))
        self.assertEqual(recorder.last.url.path, "/1/tags")
        self.assertEqual(recorder.form(), {"to": "42"})

    async def test_add_tag_many_users(self):
        recorder = Recorder()
        await _client(recorder).add_tag_to_photo("1", ["42", "43"])
        tags = json.loads(recorder.form()["tags"])
        self.assertEqual(tags, [{"tag_uid": "42"}, {"tag_uid": "43"}])

    async def test_add_tag_rejects_empty_list(self):
        with self.assertRaises(ValueError):
            await _client(Recorder()).add_tag_to_photo("1", [])

    async def test_update_tag_with_position(self):
        recorder = Recorder()
        await _client(recorder).update_tag_on_photo("1", TagUpdate(to="42", x=50, y=25))
        self.assertEqual(recorder.last.method, "POST")
        self.assertEqual(recorder.form(), {"to": "42", "x": "50.0", "y": "25.0"})

    async def test_photo_url(self):
        recorder = Recorder(payload={"data": {"url": "https://cdn/p.jpg"}})
        url = await _client(recorder).get_photo_url("1")
        self.assertEqual(url, "https://cdn/p.jpg")
        self.assertEqual(recorder.last.url.path, "/1/picture")
        self.assertEqual(dict(recorder.last.url.params), {"redirect": "false"})


class TestVideos(unittest.IsolatedAsyncioTestCase):

    async def test_get_video(self):
        recorder = Recorder(payload={"id": "v1", "title": "clip", "length": 12.5})
        video = await _client(recorder).get_video("v1", reading=Reading(fields=["title"]))
        self.assertIsInstance(video, Video)
        self.assertEqual(video.length, 12.5)
        self.assertEqual(dict(recorder.last.url.params), {"fields": "title"})

    async def test_post_video_uses_video_host(self):
        recorder = Recorder(payload={"id": "v2"})
        new_id = await _client(recorder).post_video(
            Media(content=b"MP4"), user_id="99", title="t"
        )
        self.assertEqual(new_id, "v2")
        self.assertEqual(recorder.last.url.host, "graph-video.facebook.com")
        self.assertEqual(recorder.last.url.path, "/99/videos")

    async def test_video_likes_collection(self):
        recorder = Recorder(payload={"data": [{"id": "u1", "name": "Ann"}]})
        page = await _client(recorder).get_video_likes("v1")
        self.assertEqual(page[0].name, "Ann")
        self.assertEqual(recorder.last.url.path, "/v1/likes")

    async def test_video_comments_and_comment(self):
        recorder = Recorder(payload={"data": [{"id": "c1", "message": "wow"}]})
        client = _client(recorder)
        page = await client.get_video_comments("v1", reading=Reading(limit=1))
        self.assertEqual(page[0].message, "wow")
        self.assertEqual(dict(recorder.last.url.params), {"limit": "1"})

        recorder.payload = {"id": "v1_c2"}
        self.assertEqual(await client.comment_video("v1", "great"), "v1_c2")
        self.assertEqual(recorder.last.url.path, "/v1/comments")
        self.assertEqual(recorder.form(), {"message": "great"})

    async def test_video_cover(self):
        recorder = Recorder(payload={"data": {"url": "https://cdn/cover.jpg"}})
        self.assertEqual(await _client(recorder).get_video_cover("v1"), "https://cdn/cover.jpg")
        self.assertEqual(recorder.last.url.path, "/v1/picture")


class TestTransport(unittest.IsolatedAsyncioTestCase):

    async def test_connection_refused_is_service_unavailable(self):
        recorder = Recorder(error=httpx.ConnectError)
        with self.assertRaises(ServiceUnavailable) as ctx:
            await _client(recorder).get_photo("1")
        self.assertIsInstance(ctx.exception.__cause__, httpx.ConnectError)

    async def test_timeout_is_service_unavailable(self):
        recorder = Recorder(error=httpx.ReadTimeout)
        with self.assertRaises(ServiceUnavailable):
            await _client(recorder).get_videos()

    async def test_rejection_keeps_remote_message(self):
        recorder = Recorder(
            status=400,
            payload={"error": {"message": "Invalid OAuth access token.", "type": "OAuthException", "code": 190}},
        )
        with self.assertRaises(RequestRejected) as ctx:
            await _client(recorder).like_video("1")
        self.assertEqual(ctx.exception.message, "Invalid OAuth access token.")
        self.assertEqual(ctx.exception.code, 190)

    async def test_access_token_sent_as_bearer(self):
        recorder = Recorder(payload={"id": "1"})
        await _client(recorder, access_token="tok").get_photo("1")
        self.assertEqual(recorder.last.headers["authorization"], "Bearer tok")

    async def test_injected_client_is_left_open(self):
        recorder = Recorder(payload={"id": "1"})
        http = build_async_client(_settings(), transport=httpx.MockTransport(recorder))
        transport = HttpxTransport(_settings(), client=http)
        client = GraphMediaClient(_settings(), transport=transport)
        await client.get_photo("1")
        await client.get_photo("2")
        self.assertFalse(http.is_closed)
        await http.aclose()

    def test_transport_and_http_client_are_exclusive(self):
        http = build_async_client(_settings(), transport=httpx.MockTransport(Recorder()))
        with self.assertRaises(ValueError):
            GraphMediaClient(_settings(), transport=HttpxTransport(_settings()), http_client=http)

    async def test_concurrent_calls_share_client(self):
        recorder = Recorder(payload={"id": "1"})
        client = _client(recorder)
        results = await asyncio.gather(*(client.get_photo(str(i)) for i in range(5)))
        self.assertEqual(len(results), 5)
        self.assertEqual(sorted(r.url.path for r in recorder.requests), ["/0", "/1", "/2", "/3", "/4"])


if __name__ == "__main__":
    unittest.main()
