import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.models.business import Business
from app.services.onboarding import onboarding_service, FailureReason, OnboardingStatus


def _raise_store_error(*args, **kwargs):
    raise SQLAlchemyError("connection refused")


def test_status_reflects_stored_step(db, business):
    result = onboarding_service.resolve_onboarding_status(db, business.id)

    assert result
    assert result.status == OnboardingStatus(business_id=business.id, completed=False, current_step=3)
    assert result.status.redirect == "/onboarding/business-config"


def test_missing_business_is_not_found(db):
    result = onboarding_service.resolve_onboarding_status(db, "missing-business")

    assert not result
    assert result.reason == FailureReason.NOT_FOUND


def test_check_defaults_for_missing_business(db):
    status = onboarding_service.check_onboarding_status(db, "missing-business")

    assert status.completed is False
    assert status.current_step == 0
    assert status.redirect == "/onboarding/business-setup"


def test_null_step_is_reported_as_zero(db, business):
    business.onboarding_step = None
    db.commit()

    status = onboarding_service.check_onboarding_status(db, business.id)

    assert status.current_step == 0
    assert status.completed is False


def test_update_step_overwrites(db, business):
    result = onboarding_service.update_onboarding_step(db, business.id, 5)
    assert result
    assert result.status.current_step == 5

    # moving backwards is allowed
    result = onboarding_service.update_onboarding_step(db, business.id, 2)
    assert result.status.current_step == 2
    assert onboarding_service.check_onboarding_status(db, business.id).current_step == 2


@pytest.mark.parametrize("step", [-1, 8, 100])
def test_update_rejects_out_of_range_step(db, business, step):
    result = onboarding_service.update_onboarding_step(db, business.id, step)

    assert not result
    assert result.reason == FailureReason.INVALID_STEP
    assert onboarding_service.check_onboarding_status(db, business.id).current_step == 3


def test_update_missing_business_is_not_found(db):
    result = onboarding_service.update_onboarding_step(db, "missing-business", 4)

    assert not result
    assert result.reason == FailureReason.NOT_FOUND


def test_complete_then_check(db, business):
    result = onboarding_service.complete_onboarding(db, business.id)
    assert result

    status = onboarding_service.check_onboarding_status(db, business.id)
    assert status.completed is True
    assert status.current_step == 7
    assert status.redirect == "/"

    stored = db.get(Business, business.id)
    db.refresh(stored)
    assert stored.is_active is True
    assert stored.onboarding_completed_at is not None


def test_complete_missing_business_is_not_found(db):
    result = onboarding_service.complete_onboarding(db, "missing-business")

    assert not result
    assert result.reason == FailureReason.NOT_FOUND


def test_complete_flags_owner(db, business, owner):
    assert onboarding_service.complete_onboarding(db, business.id, user=owner)

    db.refresh(owner)
    assert owner.owner_onboarding_completed is True


def test_complete_leaves_staff_flag_alone(db, business, staff_user):
    assert onboarding_service.complete_onboarding(db, business.id, user=staff_user)

    db.refresh(staff_user)
    assert staff_user.owner_onboarding_completed is False


def test_owner_flag_failure_does_not_fail_completion(db, business, owner, monkeypatch):
    monkeypatch.setattr(onboarding_service.crud, "mark_owner_completed", _raise_store_error)

    result = onboarding_service.complete_onboarding(db, business.id, user=owner)

    assert result
    assert result.status.completed is True


def test_store_error_is_distinguishable(db, business, monkeypatch):
    monkeypatch.setattr(onboarding_service.crud, "get_progress", _raise_store_error)

    result = onboarding_service.resolve_onboarding_status(db, business.id)
    assert not result
    assert result.reason == FailureReason.STORE_ERROR
    assert "connection refused" in result.detail

    status = onboarding_service.check_onboarding_status(db, business.id)
    assert status == OnboardingStatus.initial(business.id)


def test_store_error_on_write(db, business, monkeypatch):
    monkeypatch.setattr(onboarding_service.crud, "set_step", _raise_store_error)

    result = onboarding_service.update_onboarding_step(db, business.id, 4)

    assert not result
    assert result.reason == FailureReason.STORE_ERROR


def test_store_error_on_complete(db, business, monkeypatch):
    monkeypatch.setattr(onboarding_service.crud, "mark_completed", _raise_store_error)

    result = onboarding_service.complete_onboarding(db, business.id)

    assert not result
    assert result.reason == FailureReason.STORE_ERROR
