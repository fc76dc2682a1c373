"""
Genres Router

Server-rendered pages for the genre resource: list, detail, create, update
and delete.

Every handler follows the same shape:
1. Read the path/form input (trimmed and escaped)
2. Query the store, concurrently where two lookups are independent
3. Either render a page with the data and any form errors,
   or write and redirect (303 See Other, so the browser follows with GET)

Database errors are not caught here; they reach the exception handlers
registered in catalog.main. Form errors and a blocked delete are not
errors: the page that was submitted is rendered again.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from catalog.config import get_settings
from catalog.dependencies import Store, Templates
from catalog.exceptions import GenreNotFoundError
from catalog.models import Genre
from catalog.schemas import (
    GenreCreateForm,
    GenreDeleteForm,
    GenreResponse,
    GenreUpdateForm,
    form_errors,
    sanitize,
)
from catalog.services.cache import (
    GENRE_LIST_KEY,
    cache_get,
    cache_set,
    invalidate_genre_cache,
)
from catalog.services.genre_store import GenreStore
from catalog.services.genres import fetch_genre_with_books, parse_genre_id
from catalog.services.rate_limiter import limiter

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    tags=["Genres"],
    default_response_class=HTMLResponse,
    responses={
        404: {"description": "Genre not found"},
    },
)


def redirect_to(url: str) -> RedirectResponse:
    """Redirect a form submission to a page."""
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def genre_list_url() -> str:
    return f"{settings.catalog_prefix}/genres"


# =============================================================================
# List
# =============================================================================
@router.get(
    "/genres",
    summary="List all genres",
    description="Page listing every genre ordered by name.",
)
@limiter.limit(settings.rate_limit_default)
def genre_list(request: Request, store: Store, templates: Templates) -> Response:
    """List all genres, served from the cache when possible."""
    cached = cache_get(GENRE_LIST_KEY)
    if cached is not None:
        genre_list = [GenreResponse.model_validate(g) for g in cached]
    else:
        genre_list = [GenreResponse.model_validate(g) for g in store.find_all()]
        cache_set(GENRE_LIST_KEY, [g.model_dump() for g in genre_list])

    return templates.TemplateResponse(
        request,
        "genre_list.html",
        {"title": "Genre List", "genre_list": genre_list},
    )


# =============================================================================
# Create
# =============================================================================
# Declared before /genre/{genre_id} so "create" is not taken for an id.

@router.get(
    "/genre/create",
    summary="Create genre form",
)
@limiter.limit(settings.rate_limit_default)
def genre_create_get(request: Request, templates: Templates) -> Response:
    """Render an empty creation form."""
    return templates.TemplateResponse(
        request,
        "genre_form.html",
        {"title": "Create Genre"},
    )


@router.post(
    "/genre/create",
    summary="Create a genre",
    description="Create a genre, or go to the existing one with the same name.",
)
@limiter.limit(settings.rate_limit_write)
def genre_create_post(
    request: Request,
    store: Store,
    templates: Templates,
    name: Annotated[str, Form()] = "",
) -> Response:
    """
    Create a new genre.

    Creating a name that already exists writes nothing and redirects to the
    existing genre. The lookup and the insert are separate statements; if a
    concurrent request inserts the same name in between, the unique
    constraint rejects ours and we redirect to theirs.
    """
    try:
        form = GenreCreateForm(name=name)
    except ValidationError as exc:
        return templates.TemplateResponse(
            request,
            "genre_form.html",
            {
                "title": "Create Genre",
                "genre": {"name": sanitize(name)},
                "errors": form_errors(exc),
            },
        )

    found_genre = store.find_one_by_name(form.name)
    if found_genre is not None:
        logger.info(f"Genre '{form.name}' already exists as {found_genre.id}")
        return redirect_to(found_genre.url)

    try:
        genre = store.save(Genre(name=form.name))
    except IntegrityError:
        genre = store.find_one_by_name(form.name)
        if genre is None:
            raise

    invalidate_genre_cache()
    return redirect_to(genre.url)


# =============================================================================
# Detail
# =============================================================================
@router.get(
    "/genre/{genre_id}",
    summary="Genre detail",
    description="A genre and the books in it.",
)
@limiter.limit(settings.rate_limit_default)
async def genre_detail(
    request: Request,
    genre_id: str,
    store: Store,
    templates: Templates,
) -> Response:
    """Show a genre with its books, both fetched concurrently."""
    result = await fetch_genre_with_books(store, parse_genre_id(genre_id))
    if result.genre is None:
        raise GenreNotFoundError(genre_id.strip())

    return templates.TemplateResponse(
        request,
        "genre_detail.html",
        {
            "title": "Genre Detail",
            "genre": result.genre,
            "genre_books": result.books,
        },
    )


# =============================================================================
# Delete
# =============================================================================
@router.get(
    "/genre/{genre_id}/delete",
    summary="Delete genre confirmation",
)
@limiter.limit(settings.rate_limit_default)
async def genre_delete_get(
    request: Request,
    genre_id: str,
    store: Store,
    templates: Templates,
) -> Response:
    """Ask for confirmation, listing any books that block the delete."""
    result = await fetch_genre_with_books(store, parse_genre_id(genre_id))
    if result.genre is None:
        # Nothing to delete
        return redirect_to(genre_list_url())

    return templates.TemplateResponse(
        request,
        "genre_delete.html",
        {
            "title": "Delete Genre",
            "genre": result.genre,
            "genre_books": result.books,
        },
    )


@router.post(
    "/genre/{genre_id}/delete",
    summary="Delete a genre",
    description="Delete a genre that no book references.",
)
@limiter.limit(settings.rate_limit_write)
async def genre_delete_post(
    request: Request,
    store: Store,
    templates: Templates,
    genreid: Annotated[str, Form()] = "",
) -> Response:
    """
    Delete the genre named by the `genreid` form field.

    While any book references the genre, nothing is removed and the
    confirmation page is shown again with those books.
    """
    try:
        form = GenreDeleteForm(genreid=genreid)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=form_errors(exc)[0]["msg"],
        )

    target_id = parse_genre_id(form.genreid)
    result = await fetch_genre_with_books(store, target_id)

    if result.has_books:
        logger.info(
            f"Delete of genre {target_id} blocked by {len(result.books)} book(s)"
        )
        return templates.TemplateResponse(
            request,
            "genre_delete.html",
            {
                "title": "Delete Genre",
                "genre": result.genre,
                "genre_books": result.books,
            },
        )

    await run_in_threadpool(store.find_by_id_and_remove, target_id)
    await run_in_threadpool(invalidate_genre_cache)
    return redirect_to(genre_list_url())


# =============================================================================
# Update
# =============================================================================
@router.get(
    "/genre/{genre_id}/update",
    summary="Update genre form",
)
@limiter.limit(settings.rate_limit_default)
def genre_update_get(
    request: Request,
    genre_id: str,
    store: Store,
    templates: Templates,
) -> Response:
    """Render the edit form filled with the genre's current name."""
    target_id = parse_genre_id(genre_id)
    genre = store.find_by_id(target_id)
    if genre is None:
        raise GenreNotFoundError(target_id)

    return templates.TemplateResponse(
        request,
        "genre_form.html",
        {"title": "Update Genre", "genre": genre},
    )


@router.post(
    "/genre/{genre_id}/update",
    summary="Update a genre",
    description="Rename a genre. Its id stays the same.",
)
@limiter.limit(settings.rate_limit_write)
def genre_update_post(
    request: Request,
    genre_id: str,
    store: Store,
    templates: Templates,
    name: Annotated[str, Form()] = "",
) -> Response:
    """Rename a genre in place and redirect to its detail page."""
    target_id = parse_genre_id(genre_id)

    try:
        form = GenreUpdateForm(name=name)
    except ValidationError as exc:
        return _render_update_form(
            request, templates, store, target_id, form_errors(exc)
        )

    try:
        genre = store.find_by_id_and_update(target_id, form.name)
    except IntegrityError:
        errors = [
            {"param": "name", "msg": f"Genre with name '{form.name}' already exists"}
        ]
        return _render_update_form(request, templates, store, target_id, errors)

    if genre is None:
        raise GenreNotFoundError(target_id)

    invalidate_genre_cache()
    return redirect_to(genre.url)


def _render_update_form(
    request: Request,
    templates: Jinja2Templates,
    store: GenreStore,
    genre_id: int,
    errors: list,
) -> Response:
    """Show the edit form again with the stored genre and the errors."""
    genre = store.find_by_id(genre_id)
    if genre is None:
        raise GenreNotFoundError(genre_id)

    return templates.TemplateResponse(
        request,
        "genre_form.html",
        {"title": "Update Genre", "genre": genre, "errors": errors},
    )
