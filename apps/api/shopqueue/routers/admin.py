import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from shopqueue.core.database import get_db
from shopqueue.core.errors import commit_or_raise
from shopqueue.models.ad import Ad
from shopqueue.models.service import Service
from shopqueue.routers.shops import require_shop, shop_dict
from shopqueue.scheduling.queue_eta import aggregate_queue
from shopqueue.scheduling.time_utils import as_utc, utcnow
from shopqueue.schemas.ads import AdCreate, AdOut, AdToggle
from shopqueue.schemas.services import ServiceCreate, ServiceOut, ServiceUpdate
from shopqueue.schemas.shops import TvSettingsOut, TvSettingsUpdate
from shopqueue.services.display import clamp_tv_ad_rotation_seconds, clamp_tv_left_percent, tv_settings
from shopqueue.services.queue_snapshot import projected_queue

router = APIRouter()
logger = logging.getLogger(__name__)

DASHBOARD_QUEUE_LIMIT = 50


def service_out(s: Service) -> ServiceOut:
    return ServiceOut(
        service_id=str(s.service_id),
        shop_id=str(s.shop_id),
        name=s.name,
        duration_minutes=s.duration_minutes,
        slack_minutes=s.slack_minutes,
        price=float(s.price),
        is_active=s.is_active,
    )


def ad_out(a: Ad) -> AdOut:
    return AdOut(
        ad_id=str(a.ad_id),
        title=a.title,
        image_url=a.image_url,
        video_url=a.video_url,
        is_active=a.is_active,
    )


# --- Dashboard ---
@router.get("/dashboard")
def get_dashboard(
    shop_id: UUID = Query(alias="shopId"),
    db: Session = Depends(get_db),
    now: datetime = Depends(utcnow),
):
    shop = require_shop(db, shop_id)
    stats = aggregate_queue(projected_queue(db, shop_id, DASHBOARD_QUEUE_LIMIT))

    return {
        "ok": True,
        "shop": shop_dict(shop),
        "stats": {**stats.to_dict(), "last_refresh": as_utc(now).isoformat()},
    }


# --- Services ---
@router.get("/services")
def list_services(shop_id: UUID = Query(alias="shopId"), db: Session = Depends(get_db)):
    services = db.execute(
        select(Service).where(Service.shop_id == shop_id).order_by(Service.created_at.asc(), Service.name.asc())
    ).scalars().all()
    return {"ok": True, "services": [service_out(s) for s in services]}


@router.post("/services")
def create_service(payload: ServiceCreate, db: Session = Depends(get_db)):
    require_shop(db, payload.shop_id)

    s = Service(
        shop_id=payload.shop_id,
        name=payload.name,
        duration_minutes=payload.duration_minutes,
        slack_minutes=payload.slack_minutes,
        price=payload.price,
        is_active=True,
    )
    db.add(s)
    commit_or_raise(db, "Service create")
    db.refresh(s)
    logger.info("Created service %s (%s min) at shop %s", s.service_id, s.duration_minutes, s.shop_id)
    return {"ok": True, "service": service_out(s)}


@router.patch("/services")
def update_service(payload: ServiceUpdate, db: Session = Depends(get_db)):
    s = db.get(Service, payload.id)
    if not s:
        raise HTTPException(status_code=404, detail="Service not found")

    # only the fields the client actually sent
    for field, value in payload.model_dump(exclude_unset=True, exclude={"id"}).items():
        if value is not None:
            setattr(s, field, value)

    commit_or_raise(db, "Service update")
    db.refresh(s)
    return {"ok": True, "service": service_out(s)}


# --- Ads ---
@router.get("/ads")
def list_ads(shop_id: UUID = Query(alias="shopId"), db: Session = Depends(get_db)):
    ads = db.execute(
        select(Ad).where(Ad.shop_id == shop_id).order_by(Ad.created_at.desc())
    ).scalars().all()
    return {"ok": True, "ads": [ad_out(a) for a in ads]}


@router.post("/ads")
def create_ad(payload: AdCreate, db: Session = Depends(get_db)):
    if not (payload.title or payload.image_url or payload.video_url):
        raise HTTPException(status_code=400, detail="An ad needs a title, imageUrl or videoUrl")
    require_shop(db, payload.shop_id)

    a = Ad(
        shop_id=payload.shop_id,
        title=payload.title or None,
        image_url=payload.image_url or None,
        video_url=payload.video_url or None,
        is_active=True,
    )
    db.add(a)
    commit_or_raise(db, "Ad create")
    db.refresh(a)
    return {"ok": True, "ad": ad_out(a)}


@router.patch("/ads")
def toggle_ad(payload: AdToggle, db: Session = Depends(get_db)):
    a = db.get(Ad, payload.id)
    if not a:
        raise HTTPException(status_code=404, detail="Ad not found")

    a.is_active = payload.is_active
    commit_or_raise(db, "Ad update")
    db.refresh(a)
    return {"ok": True, "ad": ad_out(a)}


# --- TV settings ---
@router.get("/tv-settings", response_model=TvSettingsOut)
def get_tv_settings(shop_id: UUID = Query(alias="shopId"), db: Session = Depends(get_db)):
    shop = require_shop(db, shop_id)
    return TvSettingsOut(**tv_settings(shop))


@router.patch("/tv-settings", response_model=TvSettingsOut)
def update_tv_settings(payload: TvSettingsUpdate, db: Session = Depends(get_db)):
    shop = require_shop(db, payload.shop_id)

    shop.tv_left_percent = clamp_tv_left_percent(payload.tv_left_percent)
    shop.tv_ad_rotation_seconds = clamp_tv_ad_rotation_seconds(payload.tv_ad_rotation_seconds)
    commit_or_raise(db, "TV settings update")
    db.refresh(shop)
    return TvSettingsOut(**tv_settings(shop))
