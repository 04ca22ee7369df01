"""FastAPI application exposing availability and booking.

Scheduling errors map directly to HTTP responses:
NotFound -> 404, CaseClosed/ValidationError -> 400, Conflict -> 409.
"""

from datetime import date

from fastapi import FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docket import __version__
from docket.api.schemas import (
    AssignJudgeRequest,
    ChangeStatusRequest,
    ScheduleHearingRequest,
    UpdateHearingRequest,
)
from docket.core.case import CaseStatus
from docket.core.errors import SchedulingError
from docket.system import Docket
from docket.utils.logging import setup_logger

logger = setup_logger(__name__)


def create_app(docket: Docket) -> FastAPI:
    """Build the API over a wired docket.

    Args:
        docket: Components serving the requests

    Returns:
        FastAPI application
    """
    app = FastAPI(title="Courtroom Hearing Scheduler", version=__version__)
    app.state.docket = docket

    @app.exception_handler(SchedulingError)
    async def _scheduling_error(request: Request, exc: SchedulingError):
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))

    @app.exception_handler(RequestValidationError)
    async def _request_invalid(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={
                "error": "ValidationError",
                "message": "Invalid request",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    @app.get("/health")
    def health():
        return {"ok": True, "courts": len(docket.courts), "hearings": len(docket.hearings)}

    @app.get("/courts")
    def list_courts():
        return [c.to_dict() for c in docket.courts.list_courts()]

    @app.get("/courts/{court_id}/available-slots/{day}")
    def available_slots(court_id: str, day: date):
        return docket.availability.describe_day(court_id, day).to_dict()

    @app.get("/courts/{court_id}/hearings/{day}")
    def court_hearings(court_id: str, day: date):
        return [h.to_dict() for h in docket.booking.hearings_for_court(court_id, day)]

    @app.post("/hearings", status_code=201)
    def schedule_hearing(body: ScheduleHearingRequest):
        hearing = docket.booking.schedule_hearing(
            case_id=body.case_id,
            court_id=body.court_id,
            hearing_date=body.date,
            start_time=body.time,
            notes=body.notes,
            judge_id=body.judge_id,
        )
        return hearing.to_dict()

    @app.get("/hearings/{hearing_id}")
    def get_hearing(hearing_id: str):
        return docket.booking.get_hearing(hearing_id).to_dict()

    @app.put("/hearings/{hearing_id}")
    def update_hearing(hearing_id: str, body: UpdateHearingRequest):
        hearing = docket.booking.update_hearing(
            hearing_id,
            court_id=body.court_id,
            hearing_date=body.date,
            start_time=body.time,
            notes=body.notes,
        )
        return hearing.to_dict()

    @app.delete("/hearings/{hearing_id}", status_code=204)
    def delete_hearing(hearing_id: str):
        docket.booking.delete_hearing(hearing_id)
        return Response(status_code=204)

    @app.get("/cases/{case_id}/hearings")
    def case_hearings(case_id: str):
        return [h.to_dict() for h in docket.booking.hearings_for_case(case_id)]

    @app.get("/judges/{judge_id}/hearings")
    def judge_hearings(judge_id: str):
        return [h.to_dict() for h in docket.booking.hearings_for_judge(judge_id)]

    @app.put("/cases/{case_id}/judge")
    def assign_judge(case_id: str, body: AssignJudgeRequest):
        return docket.case_admin.assign_judge(case_id, body.judge_id).to_dict()

    @app.put("/cases/{case_id}/status")
    def change_status(case_id: str, body: ChangeStatusRequest):
        status = CaseStatus.parse(body.status)
        return docket.case_admin.change_status(case_id, status).to_dict()

    return app
