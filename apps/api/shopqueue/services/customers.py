import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from shopqueue.models.customer import Customer

logger = logging.getLogger(__name__)


def find_customer_by_phone(db: Session, phone: str) -> Customer | None:
    return db.execute(select(Customer).where(Customer.phone == phone)).scalar_one_or_none()


def find_or_create_customer(db: Session, first_name: str, last_name: str, phone: str) -> Customer:
    """
    Phone number is the customer key. An existing customer keeps the name on
    file; the caller commits.
    """
    customer = find_customer_by_phone(db, phone)
    if customer:
        return customer

    customer = Customer(first_name=first_name, last_name=last_name, phone=phone)
    db.add(customer)
    db.flush()
    logger.info("Created customer %s", customer.customer_id)
    return customer
