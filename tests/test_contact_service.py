from stampit.models.customer import Customer
from stampit.services import contact_service
from stampit.services.contact_service import get_customer_by_phone, get_or_create_customer


def test_new_phone_creates_exactly_one_customer(db_session):
    customer = get_or_create_customer(db_session, "555-0123", "Linus")
    db_session.commit()

    assert customer.id is not None
    assert customer.name == "Linus"
    assert db_session.query(Customer).filter(Customer.phone == "555-0123").count() == 1


def test_repeat_phone_does_not_insert(db_session):
    first = get_or_create_customer(db_session, "555-0123", "Linus")
    db_session.commit()

    again = get_or_create_customer(db_session, "555-0123", "Someone Else")
    db_session.commit()

    assert again.id == first.id
    assert again.name == "Linus"
    assert db_session.query(Customer).count() == 1


def test_missing_name_is_stored_as_null(db_session):
    customer = get_or_create_customer(db_session, "555-0124", "")
    db_session.commit()
    db_session.refresh(customer)

    assert customer.name is None


def test_phone_matches_exactly(db_session):
    get_or_create_customer(db_session, " 555-0125", None)
    db_session.commit()

    assert get_customer_by_phone(db_session, "555-0125") is None
    assert get_customer_by_phone(db_session, " 555-0125") is not None
    assert get_customer_by_phone(db_session, "") is None
    assert get_customer_by_phone(db_session, None) is None


def test_concurrent_insert_of_same_phone_reuses_winner(db_session, monkeypatch):
    real_lookup = contact_service.get_customer_by_phone
    calls = []

    def lookup_then_lose_race(db, phone):
        calls.append(phone)
        if len(calls) == 1:
            # another request commits the same phone after our lookup misses
            db.add(Customer(phone=phone, name="Other"))
            db.commit()
            return None
        return real_lookup(db, phone)

    monkeypatch.setattr(contact_service, "get_customer_by_phone", lookup_then_lose_race)

    customer = get_or_create_customer(db_session, "555-0126", "Mine")
    db_session.commit()

    assert len(calls) == 2
    assert customer.name == "Other"
    assert db_session.query(Customer).filter(Customer.phone == "555-0126").count() == 1
