"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Query, Request, Response, status
from fastapi.responses import HTMLResponse, JSONResponse

from session_vote.api.schemas import (
    AttendeeIn,
    AttendeeOut,
    SessionRatingIn,
    SessionRatingOut,
)
from session_vote.app_logging import configure_logging
from session_vote.containers import AppContainer
from session_vote.domain.models import SessionRating
from session_vote.services.votes import (
    InvalidAttendeeError,
    NotFoundError,
    TransientReadError,
    VoteService,
)

SERVICE_BANNER = "Microservice Session Vote Application"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level, container.backend_name)
    logger = logging.getLogger(__name__)
    logger.info("Session vote API using %s backend", container.backend_name)

    app = FastAPI(title="Session Vote")
    app.state.container = container

    @app.exception_handler(NotFoundError)
    async def not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(InvalidAttendeeError)
    async def invalid_attendee(
        _request: Request, exc: InvalidAttendeeError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(TransientReadError)
    async def transient_read(
        _request: Request, exc: TransientReadError
    ) -> JSONResponse:
        logger.error("Giving up after retries: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)

    @app.get("/", response_class=HTMLResponse)
    async def info() -> str:
        """Liveness banner."""
        return SERVICE_BANNER

    @app.get("/health")
    async def health(request: Request) -> JSONResponse:
        """Report the health flag and active backend."""
        state_container: AppContainer = request.app.state.container
        code = (
            status.HTTP_503_SERVICE_UNAVAILABLE
            if state_container.health.is_app_down
            else status.HTTP_200_OK
        )
        return JSONResponse(
            status_code=code,
            content={
                "status": state_container.health.status(),
                "backend": state_container.backend_name,
            },
        )

    @app.post("/updateHealthStatus", status_code=status.HTTP_204_NO_CONTENT)
    async def update_health_status(
        request: Request, is_app_down: bool = Query(alias="isAppDown")
    ) -> Response:
        """Flip the externally controlled app-down flag."""
        state_container: AppContainer = request.app.state.container
        state_container.health.set_app_down(is_app_down)
        logger.info("Health flag updated: is_app_down=%s", is_app_down)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.post("/attendee")
    async def register_attendee(payload: AttendeeIn, request: Request) -> AttendeeOut:
        """Register a new attendee."""
        attendee = _votes(request).register_attendee(payload.name)
        return AttendeeOut.from_domain(attendee)

    @app.get("/attendee")
    async def list_attendees(request: Request) -> list[AttendeeOut]:
        """List all attendees."""
        return [AttendeeOut.from_domain(a) for a in _votes(request).list_attendees()]

    @app.get("/attendee/retries")
    def list_attendees_with_retries(request: Request) -> list[AttendeeOut]:
        """List all attendees, retrying transient empty reads.

        Declared without async so the backoff sleeps run in the threadpool.
        """
        attendees = _votes(request).list_attendees_with_retries()
        return [AttendeeOut.from_domain(a) for a in attendees]

    @app.put("/attendee/{attendee_id}")
    async def update_attendee(
        attendee_id: str, payload: AttendeeIn, request: Request
    ) -> AttendeeOut:
        """Rename an attendee."""
        attendee = _votes(request).update_attendee(attendee_id, payload.name)
        return AttendeeOut.from_domain(attendee)

    @app.get("/attendee/{attendee_id}")
    async def get_attendee(attendee_id: str, request: Request) -> AttendeeOut:
        """Return one attendee."""
        return AttendeeOut.from_domain(_votes(request).get_attendee(attendee_id))

    @app.delete("/attendee/{attendee_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_attendee(attendee_id: str, request: Request) -> None:
        """Delete an attendee and its ratings."""
        _votes(request).delete_attendee(attendee_id)

    @app.post("/rate")
    async def rate_session(
        payload: SessionRatingIn, request: Request
    ) -> SessionRatingOut:
        """Record a session rating."""
        rating = _votes(request).rate_session(
            payload.session_id, payload.attendee_id, payload.rating
        )
        return SessionRatingOut.from_domain(rating)

    @app.get("/rate")
    async def list_ratings(request: Request) -> list[SessionRatingOut]:
        """List all ratings."""
        return _to_ratings_out(_votes(request).list_ratings())

    @app.put("/rate/{rating_id}")
    async def update_rating(
        rating_id: str, payload: SessionRatingIn, request: Request
    ) -> SessionRatingOut:
        """Update a rating."""
        rating = _votes(request).update_rating(
            rating_id, payload.session_id, payload.attendee_id, payload.rating
        )
        return SessionRatingOut.from_domain(rating)

    @app.get("/rate/{rating_id}")
    async def get_rating(rating_id: str, request: Request) -> SessionRatingOut:
        """Return one rating."""
        return SessionRatingOut.from_domain(_votes(request).get_rating(rating_id))

    @app.delete("/rate/{rating_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_rating(rating_id: str, request: Request) -> None:
        """Delete a rating."""
        _votes(request).delete_rating(rating_id)

    @app.get("/ratingsBySession")
    async def ratings_by_session(
        request: Request, session_id: str = Query(alias="sessionId")
    ) -> list[SessionRatingOut]:
        """List ratings for a session."""
        return _to_ratings_out(_votes(request).ratings_by_session(session_id))

    @app.get("/averageRatingBySession")
    async def average_rating_by_session(
        request: Request, session_id: str = Query(alias="sessionId")
    ) -> float:
        """Return the mean rating for a session."""
        return _votes(request).average_rating(session_id)

    @app.get("/ratingsByAttendee")
    async def ratings_by_attendee(
        request: Request, attendee_id: str = Query(alias="attendeeId")
    ) -> list[SessionRatingOut]:
        """List ratings made by an attendee."""
        return _to_ratings_out(_votes(request).ratings_by_attendee(attendee_id))

    return app


def _votes(request: Request) -> VoteService:
    state_container: AppContainer = request.app.state.container
    return state_container.vote_service


def _to_ratings_out(ratings: list[SessionRating]) -> list[SessionRatingOut]:
    return [SessionRatingOut.from_domain(rating) for rating in ratings]


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})
