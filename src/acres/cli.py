"""
acres CLI

Commands:
- artwork: Print an artwork's JSON
- artworks: Print a page of the artworks listing
- search: Print artworks search results
- manifest: Print an artwork's IIIF Presentation manifest
- iiif: Print the IIIF image URL for an artwork
- info: Print the IIIF info.json for an artwork's image
- parse: Parse an IIIF image request URL into its components
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import typer
from pydantic import ValidationError

from acres import __version__
from acres.api import Api, ApiError, ArtworksQuery, InvalidQueryParams, SearchQuery
from acres.config import get_settings
from acres.iiif import IiifError, ImageRequest

app = typer.Typer(add_completion=False, help="Art Institute of Chicago API and IIIF tooling")


class JsonFormatter(logging.Formatter):
    """Simple JSON formatter for structured logs."""
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        # Include any custom attributes passed via `extra=`.
        reserved = {
            "name","msg","args","levelname","levelno","pathname","filename","module",
            "exc_info","exc_text","stack_info","lineno","funcName","created","msecs",
            "relativeCreated","thread","threadName","processName","process","taskName",
        }
        for k, v in record.__dict__.items():
            if k in reserved or k.startswith("_"):
                continue
            try:
                json.dumps(v)
                payload[k] = v
            except TypeError:
                payload[k] = repr(v)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str) -> logging.Logger:
    logger = logging.getLogger("acres")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.handlers[:] = [handler]
    logger.propagate = False
    return logger


LOGGER = logging.getLogger("acres")


def _split(value: Optional[str]) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()] if value else []


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False))


def _api(ctx: typer.Context) -> Api:
    return ctx.obj["api"]


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"acres {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging verbosity (DEBUG, INFO, WARNING, ERROR)"
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Bypass the on-disk response cache"),
    base_uri: Optional[str] = typer.Option(None, "--base-uri", help="Override the API base URI"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Art Institute of Chicago API and IIIF tooling."""
    global LOGGER
    settings = get_settings()
    LOGGER = setup_logging(log_level or settings.log_level)

    updates: dict[str, Any] = {}
    if no_cache:
        updates["use_cache"] = False
    if base_uri:
        updates["base_uri"] = base_uri
    if updates:
        settings = settings.model_copy(update=updates)

    ctx.ensure_object(dict)
    ctx.obj.setdefault("api", Api.from_settings(settings))


def _run(fn, *args, **kwargs):
    """Call an API method, turning failures into exit codes."""
    try:
        return fn(*args, **kwargs)
    except (IiifError, InvalidQueryParams) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    except ApiError as e:
        LOGGER.error("api_error", extra={"url": e.url, "status": e.status})
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except ValidationError as e:
        typer.echo(f"Error: unexpected response shape: {e.error_count()} issue(s)", err=True)
        raise typer.Exit(code=1)


@app.command("artwork")
def artwork_cmd(
    ctx: typer.Context,
    artwork_id: int = typer.Argument(..., help="The id of the artwork"),
) -> None:
    """Print an artwork as JSON."""
    _echo_json(_run(_api(ctx).artwork, artwork_id))


@app.command("artworks")
def artworks_cmd(
    ctx: typer.Context,
    ids: Optional[str] = typer.Option(None, "--ids", help="Comma-separated list of artwork ids"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Max number of artworks per page"),
    page: Optional[int] = typer.Option(None, "--page", help="Which page to retrieve"),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma-separated fields to retrieve"),
    include: Optional[str] = typer.Option(
        None, "--include", help="Comma-separated sub-resources to include"
    ),
) -> None:
    """Print a page of the artworks listing as JSON."""
    try:
        id_list = [int(i) for i in _split(ids)]
    except ValueError:
        raise typer.BadParameter(f"ids must be integers: {ids}", param_hint="--ids")
    query = ArtworksQuery(
        ids=id_list, limit=limit, page=page, fields=_split(fields), include=_split(include)
    )
    _echo_json(_run(_api(ctx).artworks, query))


@app.command("search")
def search_cmd(
    ctx: typer.Context,
    q: Optional[str] = typer.Option(None, "--q", help="Free-text search"),
    query: Optional[str] = typer.Option(None, "--query", help="Query DSL (JSON)"),
    sort: Optional[str] = typer.Option(None, "--sort", help="Sort field (requires --query)"),
    from_: Optional[int] = typer.Option(None, "--from", help="Offset of the first result"),
    size: Optional[int] = typer.Option(None, "--size", help="Number of results"),
    facets: Optional[str] = typer.Option(None, "--facets", help="Comma-separated facet fields"),
) -> None:
    """Search artworks and print the results as JSON."""
    search = SearchQuery(q=q, query=query, sort=sort, from_=from_, size=size, facets=_split(facets))
    _echo_json(_run(_api(ctx).search, search))


@app.command("manifest")
def manifest_cmd(
    ctx: typer.Context,
    artwork_id: int = typer.Argument(..., help="The id of the artwork"),
) -> None:
    """Print an artwork's IIIF Presentation manifest as JSON."""
    _echo_json(_run(_api(ctx).manifest, artwork_id))


@app.command("iiif")
def iiif_cmd(
    ctx: typer.Context,
    artwork_id: int = typer.Argument(..., help="The id of the artwork"),
    region: Optional[str] = typer.Option(None, help="IIIF region (e.g., full, pct:0,0,50,50)"),
    size: Optional[str] = typer.Option(None, help="IIIF size (default: 843,)"),
    rotation: Optional[str] = typer.Option(None, help="IIIF rotation (e.g., 0, !90)"),
    quality: Optional[str] = typer.Option(None, help="IIIF quality (e.g., default, gray)"),
    fmt: Optional[str] = typer.Option(None, "--format", help="IIIF format (e.g., jpg, png)"),
) -> None:
    """Print the IIIF Image API URL for an artwork's image."""
    params = {
        "region": region,
        "size": size,
        "rotation": rotation,
        "quality": quality,
        "format": fmt,
    }
    request = _run(
        _api(ctx).image_request,
        artwork_id,
        **{k: v for k, v in params.items() if v is not None},
    )
    typer.echo(str(request))


@app.command("info")
def info_cmd(
    ctx: typer.Context,
    artwork_id: int = typer.Argument(..., help="The id of the artwork"),
) -> None:
    """Print the IIIF info.json for an artwork's image."""
    api = _api(ctx)
    request = _run(api.image_request, artwork_id)
    _echo_json(_run(api.info, request.info()))


@app.command("parse")
def parse_cmd(
    url: str = typer.Argument(..., help="IIIF image request URL"),
) -> None:
    """Parse an IIIF image request URL and print its canonical components."""
    try:
        request = ImageRequest.parse(url)
    except IiifError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    _echo_json(
        {
            "url": str(request),
            "scheme": str(request.uri.scheme),
            "server": request.uri.server,
            "prefix": request.uri.prefix,
            "identifier": request.uri.identifier,
            "region": str(request.region),
            "size": str(request.size),
            "rotation": str(request.rotation),
            "quality": str(request.quality),
            "format": str(request.format),
            "info": str(request.info()),
        }
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
