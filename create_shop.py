#!/usr/bin/env python3
"""
Script to create a shop with weekly opening hours and its first employee.
Run this after the database migration has been completed.

Usage:
    python create_shop.py <shop_name> <employee_name> <employee_pin> [open HH:MM] [close HH:MM]

Example:
    python create_shop.py "Fade Street Barbers" "Sam" 4321 09:00 18:00

Monday-Saturday get the given hours; Sunday is closed.
"""

import sys
from datetime import time
from pathlib import Path

# Add the apps/api directory to the path so we can import from shopqueue
api_dir = Path(__file__).parent / "apps" / "api"
sys.path.insert(0, str(api_dir))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from shopqueue.core.config import settings
from shopqueue.models.employee import Employee
from shopqueue.models.shop import Shop
from shopqueue.models.shop_hours import ShopHours
from shopqueue.routers.auth import get_pin_hash
from shopqueue.scheduling.time_utils import parse_hhmm
from shopqueue.services.validators import validate_time_range

SUNDAY = 0


def create_shop(shop_name: str, employee_name: str, pin: str, open_time: time, close_time: time):
    """Create the shop, its 7 shop_hours rows and one employee."""
    engine = create_engine(settings.database_url)
    SessionLocal = sessionmaker(bind=engine)
    db = SessionLocal()

    try:
        shop = Shop(name=shop_name)
        db.add(shop)
        db.flush()

        for dow in range(7):
            db.add(
                ShopHours(
                    shop_id=shop.shop_id,
                    day_of_week=dow,
                    open_time=None if dow == SUNDAY else open_time,
                    close_time=None if dow == SUNDAY else close_time,
                    is_closed=dow == SUNDAY,
                )
            )

        employee = Employee(
            shop_id=shop.shop_id,
            name=employee_name,
            role="owner",
            pin_hash=get_pin_hash(pin),
            is_active=True,
        )
        db.add(employee)
        db.commit()

        print("Shop created successfully!")
        print(f"   Shop ID: {shop.shop_id}")
        print(f"   Name: {shop.name}")
        print(f"   Hours: Mon-Sat {open_time:%H:%M}-{close_time:%H:%M}, Sun closed")
        print(f"   Employee ID: {employee.employee_id} ({employee.name})")

        return True
    except Exception as e:
        db.rollback()
        print(f"Error creating shop: {e}")
        return False
    finally:
        db.close()

if __name__ == "__main__":
    if len(sys.argv) not in (4, 6):
        print("Usage: python create_shop.py <shop_name> <employee_name> <employee_pin> [open HH:MM] [close HH:MM]")
        print('Example: python create_shop.py "Fade Street Barbers" "Sam" 4321 09:00 18:00')
        sys.exit(1)

    shop_name, employee_name, pin = sys.argv[1], sys.argv[2], sys.argv[3]
    open_raw, close_raw = (sys.argv[4], sys.argv[5]) if len(sys.argv) == 6 else ("09:00", "18:00")

    if not shop_name or not employee_name or not pin:
        print("Shop name, employee name and PIN are required!")
        sys.exit(1)

    try:
        open_time = time(*parse_hhmm(open_raw))
        close_time = time(*parse_hhmm(close_raw))
        validate_time_range(open_time, close_time)
    except ValueError as e:
        print(f"Invalid hours: {e}")
        sys.exit(1)

    success = create_shop(shop_name, employee_name, pin, open_time, close_time)
    sys.exit(0 if success else 1)
