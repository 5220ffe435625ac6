import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from shopqueue.core.database import get_db
from shopqueue.core.errors import STATUS_CONFLICT, commit_or_raise
from shopqueue.models.attendance import EmployeeAttendance
from shopqueue.models.booking import Booking, BookingStatus
from shopqueue.models.employee import Employee
from shopqueue.models.queue_entry import QueueEntry, QueueStatus
from shopqueue.models.service_session import ServiceSession
from shopqueue.routers.auth import create_access_token, get_current_employee, verify_pin
from shopqueue.scheduling.time_utils import DATE_RE, day_bounds, parse_day, utcnow
from shopqueue.schemas.employees import (
    ClockRequest,
    ClockResponse,
    EmployeeLoginRequest,
    EmployeeLoginResponse,
    EmployeeOut,
    StartServiceRequest,
)
from shopqueue.services.queue_snapshot import booking_item, load_booked_for_window, projected_queue

router = APIRouter()
logger = logging.getLogger(__name__)

WORK_QUEUE_LIMIT = 30
WORK_BOOKINGS_LIMIT = 30


def _open_attendance(db: Session, employee: Employee) -> list[EmployeeAttendance]:
    return db.execute(
        select(EmployeeAttendance).where(
            and_(
                EmployeeAttendance.shop_id == employee.shop_id,
                EmployeeAttendance.employee_id == employee.employee_id,
                EmployeeAttendance.clock_out_at.is_(None),
            )
        )
    ).scalars().all()


def _open_session(db: Session, employee: Employee) -> ServiceSession | None:
    return db.execute(
        select(ServiceSession)
        .where(
            and_(
                ServiceSession.shop_id == employee.shop_id,
                ServiceSession.employee_id == employee.employee_id,
                ServiceSession.finished_at.is_(None),
            )
        )
        .limit(1)
    ).scalar_one_or_none()


@router.post("/login", response_model=EmployeeLoginResponse)
def login(req: EmployeeLoginRequest, db: Session = Depends(get_db)):
    """PIN login for the staff screen. PINs are only unique within a shop."""
    candidates = db.execute(
        select(Employee).where(
            and_(
                Employee.shop_id == req.shop_id,
                Employee.is_active == True,  # noqa: E712
                Employee.pin_hash.is_not(None),
            )
        )
    ).scalars().all()

    employee = next((e for e in candidates if verify_pin(req.pin, e.pin_hash)), None)
    if not employee:
        raise HTTPException(status_code=401, detail="Invalid PIN")

    access_token = create_access_token(data={"sub": str(employee.employee_id), "shop": str(employee.shop_id)})

    return EmployeeLoginResponse(
        access_token=access_token,
        employee=EmployeeOut(employee_id=str(employee.employee_id), name=employee.name, role=employee.role),
        clocked_in=bool(_open_attendance(db, employee)),
    )


@router.post("/clock", response_model=ClockResponse)
def clock(
    req: ClockRequest,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
    now: datetime = Depends(utcnow),
):
    open_rows = _open_attendance(db, employee)

    if req.action == "in":
        if open_rows:
            return ClockResponse(clocked_in=True)
        db.add(EmployeeAttendance(shop_id=employee.shop_id, employee_id=employee.employee_id, clock_in_at=now))
        commit_or_raise(db, "Clock in")
        logger.info("Employee %s clocked in", employee.employee_id)
        return ClockResponse(clocked_in=True)

    for row in open_rows:
        row.clock_out_at = now
    commit_or_raise(db, "Clock out")
    logger.info("Employee %s clocked out", employee.employee_id)
    return ClockResponse(clocked_in=False)


@router.get("/work")
def get_work(
    shop_id: UUID = Query(alias="shopId"),
    date: str = Query(pattern=DATE_RE.pattern),
    db: Session = Depends(get_db),
):
    """Staff view: live queue with ETAs plus the day's booked appointments."""
    try:
        day = parse_day(date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    queue = [item.to_dict(eta) for item, eta in projected_queue(db, shop_id, WORK_QUEUE_LIMIT)]

    start, end = day_bounds(day)
    bookings = [
        booking_item(b, c, s)
        for b, c, s in load_booked_for_window(db, shop_id, start, end, WORK_BOOKINGS_LIMIT)
    ]

    return {"ok": True, "queue": queue, "bookings": bookings}


@router.post("/start")
def start_service(
    req: StartServiceRequest,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
    now: datetime = Depends(utcnow),
):
    """Open a service session for a walk-in or an appointment. One open session per employee."""
    if not req.queue_entry_id and not req.booking_id:
        raise HTTPException(status_code=400, detail="queueEntryId or bookingId is required")

    if req.queue_entry_id:
        entry = db.get(QueueEntry, req.queue_entry_id)
        if not entry or entry.shop_id != employee.shop_id:
            raise HTTPException(status_code=404, detail="Queue entry not found")
    if req.booking_id:
        booking = db.get(Booking, req.booking_id)
        if not booking or booking.shop_id != employee.shop_id:
            raise HTTPException(status_code=404, detail="Booking not found")

    if _open_session(db, employee):
        raise HTTPException(status_code=STATUS_CONFLICT, detail="You already have an active service.")

    session = ServiceSession(
        shop_id=employee.shop_id,
        employee_id=employee.employee_id,
        queue_entry_id=req.queue_entry_id,
        booking_id=req.booking_id,
        started_at=now,
    )
    db.add(session)
    commit_or_raise(db, "Service start")
    logger.info("Employee %s started session %s", employee.employee_id, session.service_session_id)
    return {"ok": True, "service_session_id": str(session.service_session_id)}


@router.post("/finish")
def finish_service(
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
    now: datetime = Depends(utcnow),
):
    """Close the open session and complete whatever it served."""
    session = _open_session(db, employee)
    if not session:
        raise HTTPException(status_code=404, detail="No active service to finish")

    session.finished_at = now
    if session.queue_entry_id:
        entry = db.get(QueueEntry, session.queue_entry_id)
        if entry:
            entry.status = QueueStatus.completed
    if session.booking_id:
        booking = db.get(Booking, session.booking_id)
        if booking:
            booking.status = BookingStatus.completed

    commit_or_raise(db, "Service finish")
    logger.info("Employee %s finished session %s", employee.employee_id, session.service_session_id)
    return {"ok": True, "service_session_id": str(session.service_session_id)}
