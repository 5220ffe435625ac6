from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from shopqueue.core.database import get_db
from shopqueue.models.service import Service
from shopqueue.models.shop import Shop

router = APIRouter()


def require_shop(db: Session, shop_id: UUID) -> Shop:
    shop = db.get(Shop, shop_id)
    if not shop:
        raise HTTPException(status_code=404, detail="Shop not found")
    return shop


def require_service(db: Session, shop_id: UUID, service_id: UUID) -> Service:
    svc = db.get(Service, service_id)
    if not svc or svc.shop_id != shop_id:
        raise HTTPException(status_code=404, detail="Service not found")
    return svc


def shop_dict(shop: Shop) -> dict:
    return {"shop_id": str(shop.shop_id), "name": shop.name, "suburb": shop.suburb}


@router.get("/shop")
def get_shop(shop_id: UUID = Query(alias="id"), db: Session = Depends(get_db)):
    """Shop header + bookable services for the customer landing page."""
    shop = require_shop(db, shop_id)

    services = db.execute(
        select(Service)
        .where(and_(Service.shop_id == shop_id, Service.is_active == True))  # noqa: E712
        .order_by(Service.duration_minutes.asc(), Service.name.asc())
    ).scalars().all()

    return {
        "shop": shop_dict(shop),
        "services": [
            {
                "service_id": str(s.service_id),
                "name": s.name,
                "duration_minutes": s.duration_minutes,
                "price": float(s.price),
            }
            for s in services
        ],
    }
