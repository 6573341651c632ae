"""Tests for RegistrationService admission."""

from concurrent.futures import ThreadPoolExecutor
from uuid import uuid4

import pytest
from sqlalchemy.orm import sessionmaker

from app.db import Base, build_engine
from app.exceptions import (
    CapacityExceededError,
    DuplicateRegistrationError,
    NotFoundError,
    ValidationError,
)
from app.models.event import Event
from app.models.registration import Registration
from app.schemas.registration import RegistrationCreate
from app.services.registration_service import RegistrationService


def _registration(event_id, email, name="Attendee"):
    return RegistrationCreate(
        event_id=str(event_id),
        name=name,
        email=email,
        phone_number="555-0100",
        transaction_screenshot="receipts/abc.png",
    )


def test_register_admits_and_counts(db, setup_event):
    registration = RegistrationService(db).register(
        _registration(setup_event.id, "  Alice@Example.COM ")
    )
    db.refresh(setup_event)
    assert registration.id is not None
    assert registration.email == "alice@example.com"
    assert registration.registered_at is not None
    assert setup_event.registered_count == 1


def test_register_duplicate_email_case_insensitive(db, setup_event):
    svc = RegistrationService(db)
    svc.register(_registration(setup_event.id, "alice@x.com"))
    with pytest.raises(DuplicateRegistrationError):
        svc.register(_registration(setup_event.id, "ALICE@X.com"))
    db.refresh(setup_event)
    assert setup_event.registered_count == 1
    assert db.query(Registration).count() == 1


def test_same_email_different_events(db, make_event):
    svc = RegistrationService(db)
    first, second = make_event(capacity=1), make_event(capacity=1)
    svc.register(_registration(first.id, "alice@x.com"))
    svc.register(_registration(second.id, "alice@x.com"))
    assert db.query(Registration).count() == 2


def test_register_full_event(db, make_event):
    event = make_event(capacity=1)
    svc = RegistrationService(db)
    svc.register(_registration(event.id, "alice@x.com"))
    with pytest.raises(CapacityExceededError, match="full"):
        svc.register(_registration(event.id, "bob@x.com"))
    db.refresh(event)
    assert event.registered_count == 1


def test_register_zero_capacity(db, make_event):
    event = make_event(capacity=0)
    with pytest.raises(CapacityExceededError):
        RegistrationService(db).register(_registration(event.id, "alice@x.com"))


def test_duplicate_reported_before_full(db, make_event):
    event = make_event(capacity=1)
    svc = RegistrationService(db)
    svc.register(_registration(event.id, "alice@x.com"))
    with pytest.raises(DuplicateRegistrationError):
        svc.register(_registration(event.id, "alice@x.com"))


def test_register_unknown_event(db):
    with pytest.raises(NotFoundError):
        RegistrationService(db).register(_registration(uuid4(), "alice@x.com"))


@pytest.mark.parametrize("field", ["event_id", "name", "email"])
def test_register_required_fields(db, setup_event, field):
    data = _registration(setup_event.id, "alice@x.com").model_copy(update={field: "  "})
    with pytest.raises(ValidationError, match=f"{field} is required"):
        RegistrationService(db).register(data)


def test_registrations_listed_newest_first(db, setup_event):
    svc = RegistrationService(db)
    svc.register(_registration(setup_event.id, "a@x.com"))
    svc.register(_registration(setup_event.id, "b@x.com"))
    emails = [r.email for r in svc.get_registrations_for_event(setup_event.id)]
    assert emails == ["b@x.com", "a@x.com"]


def test_concurrent_registrations_respect_capacity(tmp_path):
    """N + K concurrent attempts with distinct emails admit exactly N."""
    capacity, extra = 5, 7
    engine = build_engine(f"sqlite:///{tmp_path / 'concurrency.db'}")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    with Session() as setup:
        event = Event(event_name="Launch", capacity=capacity, registered_count=0)
        setup.add(event)
        setup.commit()
        event_id = event.id

    def attempt(i):
        session = Session()
        try:
            RegistrationService(session).register(
                _registration(event_id, f"user{i}@example.com", name=f"User {i}")
            )
            return "ok"
        except CapacityExceededError:
            return "full"
        finally:
            session.close()

    try:
        with ThreadPoolExecutor(max_workers=capacity + extra) as pool:
            outcomes = list(pool.map(attempt, range(capacity + extra)))

        assert outcomes.count("ok") == capacity
        assert outcomes.count("full") == extra
        with Session() as check:
            stored = check.get(Event, event_id)
            assert stored.registered_count == capacity
            assert check.query(Registration).count() == capacity
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
