import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stampit.models.customer import Customer


logger = logging.getLogger(__name__)


def get_customer_by_phone(db: Session, phone: str | None):
    # exact match, no normalization
    if not phone:
        return None

    return db.query(Customer).filter(Customer.phone == phone).first()


def get_or_create_customer(db: Session, phone: str, name: str | None = None):
    """Find a customer by phone, inserting one only when none exists.

    An existing customer is returned untouched, whatever name is passed.
    The insert runs in a savepoint so a concurrent insert of the same phone
    (unique index) falls back to the row that won.
    """
    customer = get_customer_by_phone(db, phone)
    if customer:
        return customer

    customer = Customer(phone=phone, name=(name or "").strip() or None)
    try:
        with db.begin_nested():
            db.add(customer)
            db.flush()
    except IntegrityError:
        logger.info("customer phone already taken, reusing existing row", extra={"phone": phone})
        existing = get_customer_by_phone(db, phone)
        if existing is None:
            raise
        return existing

    logger.info("customer created", extra={"customer_id": str(customer.id)})
    return customer
