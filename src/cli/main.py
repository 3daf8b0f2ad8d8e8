"""CLI (Typer).

Por qué una CLI delgada:
- Cada comando construye `Reading`/`Media`/`TagUpdate`, llama a un método del
  cliente y delega la presentación en `ui_components`.
- Los errores del dominio se muestran en rojo y salen con código 1; no hay
  reintentos aquí.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape

from cli import doctor
from cli.ui_components import build_entities_table, build_entity_panel, print_error, print_json
from core.config import AppSettings
from core.domain.errors import GraphError
from core.domain.models import Media, Reading, ResponseList, TagUpdate
from core.logging_conf import setup_logging
from core.services.client import GraphMediaClient

app = typer.Typer(no_args_is_help=True, help="Photos and videos on the social graph API.")
photos_app = typer.Typer(no_args_is_help=True, help="Photo endpoints.")
videos_app = typer.Typer(no_args_is_help=True, help="Video endpoints.")
app.add_typer(photos_app, name="photos")
app.add_typer(videos_app, name="videos")
app.add_typer(doctor.app, name="doctor")

_console = Console()

# Settings loaded once per invocation by the root callback.
_state: dict[str, AppSettings] = {}

FieldsOption = typer.Option(None, "--fields", "-f", help="Comma separated fields to return.")
LimitOption = typer.Option(None, "--limit", "-l", min=0, help="Max items per page.")
JsonOption = typer.Option(False, "--json", help="Print raw JSON instead of tables.")


@app.callback()
def _main(
    log_level: str | None = typer.Option(None, "--log-level", help="Override GRAPH_MEDIA_LOG_LEVEL."),
) -> None:
    settings = AppSettings()
    _state["settings"] = settings
    setup_logging(log_level or settings.log_level)


def _reading(fields: str | None, limit: int | None) -> Reading | None:
    if fields is None and limit is None:
        return None
    return Reading(
        fields=[f for f in fields.split(",") if f.strip()] if fields else None,
        limit=limit,
    )


def _media(path: Path) -> Media:
    try:
        return Media.from_path(path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="PATH") from exc


def _execute(call: Callable[[GraphMediaClient], Awaitable[Any]]) -> Any:
    try:
        client = GraphMediaClient(_state.get("settings") or AppSettings())
        return asyncio.run(call(client))
    except GraphError as exc:
        print_error(_console, exc)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        _console.print(f"[red]Invalid input:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _emit(value: Any, *, title: str, as_json: bool = False) -> None:
    if as_json:
        if isinstance(value, ResponseList):
            print_json(_console, value.model_dump(mode="json", by_alias=True, exclude_none=True))
        else:
            print_json(_console, value)
        return

    if isinstance(value, ResponseList):
        _console.print(build_entities_table(title, value))
    elif isinstance(value, BaseModel):
        _console.print(build_entity_panel(value))
    elif isinstance(value, bool):
        _console.print("[green]OK[/green]" if value else "[yellow]Not acknowledged[/yellow]")
        if not value:
            raise typer.Exit(code=1)
    else:
        _console.print(str(value))


# Photos


@photos_app.command("list")
def photos_list(
    user: str | None = typer.Option(None, "--user", "-u", help="User id (default: me)."),
    fields: str | None = FieldsOption,
    limit: int | None = LimitOption,
    as_json: bool = JsonOption,
) -> None:
    """Photos a user is tagged in."""

    reading = _reading(fields, limit)
    page = _execute(lambda c: c.get_photos(user, reading=reading))
    _emit(page, title="Photos", as_json=as_json)


@photos_app.command("get")
def photos_get(
    photo_id: str,
    fields: str | None = FieldsOption,
    as_json: bool = JsonOption,
) -> None:
    reading = _reading(fields, None)
    _emit(_execute(lambda c: c.get_photo(photo_id, reading=reading)), title="Photo", as_json=as_json)


@photos_app.command("delete")
def photos_delete(photo_id: str) -> None:
    _emit(_execute(lambda c: c.delete_photo(photo_id)), title="Delete")


@photos_app.command("like")
def photos_like(photo_id: str) -> None:
    _emit(_execute(lambda c: c.like_photo(photo_id)), title="Like")


@photos_app.command("unlike")
def photos_unlike(photo_id: str) -> None:
    _emit(_execute(lambda c: c.unlike_photo(photo_id)), title="Unlike")


@photos_app.command("comments")
def photos_comments(
    photo_id: str,
    limit: int | None = LimitOption,
    as_json: bool = JsonOption,
) -> None:
    reading = _reading(None, limit)
    page = _execute(lambda c: c.get_photo_comments(photo_id, reading=reading))
    _emit(page, title="Comments", as_json=as_json)


@photos_app.command("likes")
def photos_likes(
    photo_id: str,
    limit: int | None = LimitOption,
    as_json: bool = JsonOption,
) -> None:
    reading = _reading(None, limit)
    page = _execute(lambda c: c.get_photo_likes(photo_id, reading=reading))
    _emit(page, title="Likes", as_json=as_json)


@photos_app.command("comment")
def photos_comment(photo_id: str, message: str) -> None:
    _emit(_execute(lambda c: c.comment_photo(photo_id, message)), title="Comment")


@photos_app.command("tags")
def photos_tags(photo_id: str, as_json: bool = JsonOption) -> None:
    page = _execute(lambda c: c.get_tags_on_photo(photo_id))
    _emit(page, title="Tags", as_json=as_json)


@photos_app.command("tag")
def photos_tag(
    photo_id: str,
    to: list[str] | None = typer.Option(None, "--to", help="User id to tag (repeatable)."),
    text: str | None = typer.Option(None, "--text", help="Free text tag."),
    x: float | None = typer.Option(None, "--x", min=0, max=100),
    y: float | None = typer.Option(None, "--y", min=0, max=100),
    update: bool = typer.Option(False, "--update", help="Update an existing tag."),
) -> None:
    """Tag users on a photo (or move an existing tag with --update)."""

    ids = to or []
    if len(ids) > 1 and (text or x is not None or y is not None or update):
        raise typer.BadParameter("several --to ids cannot be combined with --text/--x/--y/--update")

    target: str | list[str] | TagUpdate
    if len(ids) > 1:
        target = ids
    elif text is not None or x is not None or y is not None:
        try:
            target = TagUpdate(to=ids[0] if ids else None, tag_text=text, x=x, y=y)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    elif ids:
        target = ids[0]
    else:
        raise typer.BadParameter("use --to and/or --text")

    if update:
        if isinstance(target, list):
            raise typer.BadParameter("--update takes a single --to id")
        result = _execute(lambda c: c.update_tag_on_photo(photo_id, target))
    else:
        result = _execute(lambda c: c.add_tag_to_photo(photo_id, target))
    _emit(result, title="Tag")


@photos_app.command("url")
def photos_url(photo_id: str) -> None:
    _emit(_execute(lambda c: c.get_photo_url(photo_id)), title="URL")


@photos_app.command("upload")
def photos_upload(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    user: str | None = typer.Option(None, "--user", "-u"),
    message: str | None = typer.Option(None, "--message", "-m"),
    place: str | None = typer.Option(None, "--place"),
    no_story: bool = typer.Option(False, "--no-story"),
) -> None:
    """Upload a photo; prints the new photo id."""

    media = _media(path)
    new_id = _execute(
        lambda c: c.post_photo(
            media,
            user_id=user,
            message=message,
            place=place,
            no_story=no_story or None,
        )
    )
    _emit(new_id, title="Upload")


# Videos


@videos_app.command("list")
def videos_list(
    user: str | None = typer.Option(None, "--user", "-u", help="User id (default: me)."),
    fields: str | None = FieldsOption,
    limit: int | None = LimitOption,
    as_json: bool = JsonOption,
) -> None:
    """Videos a user is tagged in."""

    reading = _reading(fields, limit)
    page = _execute(lambda c: c.get_videos(user, reading=reading))
    _emit(page, title="Videos", as_json=as_json)


@videos_app.command("get")
def videos_get(
    video_id: str,
    fields: str | None = FieldsOption,
    as_json: bool = JsonOption,
) -> None:
    reading = _reading(fields, None)
    _emit(_execute(lambda c: c.get_video(video_id, reading=reading)), title="Video", as_json=as_json)


@videos_app.command("like")
def videos_like(video_id: str) -> None:
    _emit(_execute(lambda c: c.like_video(video_id)), title="Like")


@videos_app.command("unlike")
def videos_unlike(video_id: str) -> None:
    _emit(_execute(lambda c: c.unlike_video(video_id)), title="Unlike")


@videos_app.command("comments")
def videos_comments(
    video_id: str,
    limit: int | None = LimitOption,
    as_json: bool = JsonOption,
) -> None:
    reading = _reading(None, limit)
    page = _execute(lambda c: c.get_video_comments(video_id, reading=reading))
    _emit(page, title="Comments", as_json=as_json)


@videos_app.command("likes")
def videos_likes(
    video_id: str,
    limit: int | None = LimitOption,
    as_json: bool = JsonOption,
) -> None:
    reading = _reading(None, limit)
    page = _execute(lambda c: c.get_video_likes(video_id, reading=reading))
    _emit(page, title="Likes", as_json=as_json)


@videos_app.command("comment")
def videos_comment(video_id: str, message: str) -> None:
    _emit(_execute(lambda c: c.comment_video(video_id, message)), title="Comment")


@videos_app.command("cover")
def videos_cover(video_id: str) -> None:
    _emit(_execute(lambda c: c.get_video_cover(video_id)), title="Cover")


@videos_app.command("upload")
def videos_upload(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    user: str | None = typer.Option(None, "--user", "-u"),
    title: str | None = typer.Option(None, "--title"),
    description: str | None = typer.Option(None, "--description"),
) -> None:
    """Upload a video; prints the new video id."""

    media = _media(path)
    new_id = _execute(
        lambda c: c.post_video(media, user_id=user, title=title, description=description)
    )
    _emit(new_id, title="Upload")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
