from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional
import logging

from fastapi import Depends, FastAPI, Header, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from films.config import settings
from films.database.db import engine, wait_for_db
from films.database.sql_store import SqlFilmStore
from films.database.store import FilmStore
from films.errors import FilmError, FilmValidationError
from films.models.schemas import (
    CreatePayload,
    FilmRead,
    FilmCreate,
    FilmUpdate,
    aggregate_from_create,
    film_from_update,
    to_film_read,
)
from films.models.validation import error_pairs
from films.service.mail import Notifier, create_notifier
from films.service.read import FilmReadService
from films.service.version import format_version
from films.service.write import FilmWriteService

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TITEL_EXISTS": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_VERSION": status.HTTP_412_PRECONDITION_FAILED,
    "VERSION_OUTDATED": status.HTTP_412_PRECONDITION_FAILED,
    "ID_MISSING": status.HTTP_400_BAD_REQUEST,
    "DELIVERY_ERROR": status.HTTP_502_BAD_GATEWAY,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Launching the movie service...")
    wait_for_db(engine)
    logger.info("The service is ready to work")
    yield
    engine.dispose()
    logger.info("The movie service has stopped")


app = FastAPI(
    title="Films service",
    description="API for managing the film catalog",
    version="1.0.0",
    lifespan=lifespan,
)


def get_store() -> FilmStore:
    return SqlFilmStore(engine)


def get_notifier() -> Notifier:
    return create_notifier(settings.mail_url, timeout=settings.mail_timeout)


def get_read_service(store: FilmStore = Depends(get_store)) -> FilmReadService:
    return FilmReadService(store)


def get_write_service(
    store: FilmStore = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
) -> FilmWriteService:
    return FilmWriteService(store, notifier)


@app.exception_handler(FilmError)
async def film_error_handler(request: Request, exc: FilmError):
    content: Dict[str, Any] = {"code": exc.code, "detail": exc.message}
    if isinstance(exc, FilmValidationError):
        content["detail"] = exc.messages
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        content=content,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return await film_error_handler(request, FilmValidationError(error_pairs(exc.errors())))


@app.get("/health", summary="Liveness check")
async def health():
    return {"status": "ok"}


@app.get("/films/{film_id}",
         response_model=FilmRead,
         response_model_exclude_none=True,
         summary="Get a movie by ID",
         responses={
             304: {"description": "The movie has not changed"},
             404: {"description": "The movie was not found"}
         })
async def read_film(
        film_id: int,
        response: Response,
        schauspielers: bool = False,
        if_none_match: Optional[str] = Header(default=None),
        service: FilmReadService = Depends(get_read_service)
):
    aggregate = await service.find_by_id(film_id, with_actors=schauspielers)
    etag = format_version(aggregate.film.version)
    if if_none_match == etag:
        return Response(status_code=status.HTTP_304_NOT_MODIFIED)
    response.headers["ETag"] = etag
    return to_film_read(aggregate)


@app.get("/films",
         response_model=List[FilmRead],
         response_model_exclude_none=True,
         summary="Search movies",
         responses={
             404: {"description": "No movie matches the criteria"}
         })
async def read_films(request: Request, service: FilmReadService = Depends(get_read_service)):
    films = await service.find(dict(request.query_params))
    return [to_film_read(aggregate) for aggregate in films]


@app.post("/films",
          response_model=CreatePayload,
          status_code=status.HTTP_201_CREATED,
          summary="Add a new movie",
          responses={
              422: {"description": "Invalid movie data or the title already exists"}
          })
async def create_film(
        request: Request,
        response: Response,
        film: FilmCreate,
        service: FilmWriteService = Depends(get_write_service)
):
    film_id = await service.create(aggregate_from_create(film))
    response.headers["Location"] = str(request.url_for("read_film", film_id=film_id))
    response.headers["ETag"] = format_version(0)
    return CreatePayload(id=film_id)


@app.put("/films/{film_id}",
         status_code=status.HTTP_204_NO_CONTENT,
         summary="Update movie data",
         responses={
             404: {"description": "The movie was not found"},
             412: {"description": "The version is invalid or outdated"},
             428: {"description": "The If-Match header is missing"}
         })
async def update_film(
        film_id: int,
        film: FilmUpdate,
        if_match: Optional[str] = Header(default=None),
        service: FilmWriteService = Depends(get_write_service)
):
    if if_match is None:
        logger.warning(f"Update of movie ID {film_id} without If-Match header")
        return JSONResponse(
            status_code=status.HTTP_428_PRECONDITION_REQUIRED,
            content={"code": "PRECONDITION_REQUIRED", "detail": "Header If-Match fehlt"},
        )

    version = await service.update(film_id, film_from_update(film), if_match)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers={"ETag": format_version(version)},
    )


@app.delete("/films/{film_id}",
            status_code=status.HTTP_204_NO_CONTENT,
            summary="Delete a movie")
async def delete_film(film_id: int, service: FilmWriteService = Depends(get_write_service)):
    await service.delete(film_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def run() -> None:
    import uvicorn

    uvicorn.run("films.main:app", host="0.0.0.0", port=8000)
