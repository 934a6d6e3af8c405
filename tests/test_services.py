"""Service-level tests: the session object is passed in directly, no HTTP."""

import pytest
from sqlalchemy import false, func, select

from taskboard.core.exceptions import (
    AccountInactive,
    DuplicatePin,
    InvalidCredentials,
    InvalidInput,
    NotFound,
    Unauthenticated,
    Unauthorized,
)
from taskboard.models.user import User
from taskboard.schemas.session import SessionData
from taskboard.services import auth_service, task_service, user_service

PALLET = {
    "jobNumber": "JOB-7",
    "palletNumber": "P-7",
    "palletWidth": "42in",
    "palletLength": "42in",
    "material": "Oak",
}


@pytest.fixture
async def admin_session(db_session) -> SessionData:
    return await auth_service.login(db_session, "1234")


@pytest.mark.asyncio
async def test_login_returns_logged_in_session(db_session):
    session = await auth_service.login(db_session, "1234")
    assert session.is_logged_in is True
    assert session.role == "admin"
    assert session.user_name == "Admin"


@pytest.mark.asyncio
async def test_login_errors(db_session, add_user):
    await add_user("Idle", "7777", is_active=False)
    with pytest.raises(InvalidInput):
        await auth_service.login(db_session, "12")
    with pytest.raises(InvalidCredentials):
        await auth_service.login(db_session, "0000")
    with pytest.raises(AccountInactive):
        await auth_service.login(db_session, "7777")


def test_logout_returns_default_session():
    session = auth_service.logout()
    assert session == SessionData()
    with pytest.raises(Unauthenticated):
        auth_service.current_session(session)


def test_ensure_role_distinguishes_missing_session_from_wrong_role():
    employee = SessionData(user_id=2, user_name="Alex", role="employee", is_logged_in=True)
    with pytest.raises(Unauthenticated):
        auth_service.ensure_role(None, "admin")
    with pytest.raises(Unauthorized):
        auth_service.ensure_role(employee, "admin")
    assert auth_service.ensure_role(employee) is employee


@pytest.mark.asyncio
async def test_employee_cannot_list_employees(db_session, add_user):
    await add_user("Alex", "5678")
    session = await auth_service.login(db_session, "5678")
    with pytest.raises(Unauthorized):
        await user_service.list_employees(db_session, session)


@pytest.mark.asyncio
async def test_create_employee_duplicate_pin(db_session, admin_session):
    await user_service.create_employee(db_session, admin_session, "Alex", "5678")
    with pytest.raises(DuplicatePin):
        await user_service.create_employee(db_session, admin_session, "Sam", "5678")


@pytest.mark.asyncio
async def test_create_employee_strips_name(db_session, admin_session):
    employee = await user_service.create_employee(db_session, admin_session, "  Alex  ", "5678")
    assert employee.name == "Alex"
    assert employee.role == "employee"
    assert employee.is_active is True


@pytest.mark.asyncio
async def test_task_lifecycle(db_session, admin_session, add_user):
    alex = await add_user("Alex", "5678")
    task = await task_service.create_task(db_session, admin_session, "pallet_builder", alex.id, PALLET)
    assert task.is_completed is False
    assert task.completed_at is None
    assert task.created_by == admin_session.user_id

    alex_session = await auth_service.login(db_session, "5678")
    done = await task_service.complete_task(db_session, alex_session, str(task.id))
    assert done.is_completed is True
    assert done.completed_at is not None

    again = await task_service.complete_task(db_session, alex_session, task.id)
    assert again.is_completed is True
    assert again.completed_at is not None


@pytest.mark.asyncio
async def test_employee_list_never_leaks_other_tasks(db_session, admin_session, add_user):
    alex = await add_user("Alex", "5678")
    sam = await add_user("Sam", "8765")
    for assignee in (alex, sam, sam, alex, sam):
        await task_service.create_task(db_session, admin_session, "pallet_builder", assignee.id, PALLET)

    sam_session = await auth_service.login(db_session, "8765")
    tasks = await task_service.list_tasks(db_session, sam_session, include_completed=True)
    assert len(tasks) == 3
    assert {t.assigned_to for t in tasks} == {sam.id}

    all_tasks = await task_service.list_tasks(db_session, admin_session, include_completed=True)
    assert len(all_tasks) == 5


@pytest.mark.asyncio
async def test_complete_foreign_task_is_not_found(db_session, admin_session, add_user):
    await add_user("Alex", "5678")
    sam = await add_user("Sam", "8765")
    task = await task_service.create_task(db_session, admin_session, "pallet_builder", sam.id, PALLET)

    alex_session = await auth_service.login(db_session, "5678")
    with pytest.raises(NotFound):
        await task_service.complete_task(db_session, alex_session, task.id)


@pytest.mark.asyncio
async def test_list_tasks_requires_session(db_session):
    with pytest.raises(Unauthenticated):
        await task_service.list_tasks(db_session, SessionData())


@pytest.mark.parametrize("raw", ["", "x1", "1e3", "-1", "0", 0, -5, True, None, 1.0])
def test_parse_task_id_rejects(raw):
    with pytest.raises(InvalidInput):
        task_service.parse_task_id(raw)


def test_parse_task_id_accepts():
    assert task_service.parse_task_id("42") == 42
    assert task_service.parse_task_id(7) == 7


def test_validate_task_data_normalises_payload():
    data = task_service.validate_task_data("pallet_builder", {**PALLET, "material": " Oak "})
    assert data["material"] == "Oak"
    assert set(data) == set(PALLET)


@pytest.mark.asyncio
async def test_unique_constraint_rejects_pin_that_slips_past_precheck(
    db_session, admin_session, add_user, monkeypatch
):
    """A duplicate that a concurrent insert sneaks in is caught by the database."""
    await add_user("Alex", "5678")

    real_select = user_service.select

    def _blind_select(*entities):
        # The duplicate-PIN lookup sees nothing, as if the row landed after it ran.
        return real_select(*entities).where(false())

    monkeypatch.setattr(user_service, "select", _blind_select)

    with pytest.raises(DuplicatePin):
        await user_service.create_employee(db_session, admin_session, "Sam", "5678")
    monkeypatch.undo()

    # Rolled back and still usable
    count = await db_session.execute(
        select(func.count()).select_from(User).where(User.pin == "5678")
    )
    assert count.scalar_one() == 1
    sam = await user_service.create_employee(db_session, admin_session, "Sam", "8765")
    assert sam.id is not None


@pytest.mark.asyncio
async def test_out_of_range_ids_are_invalid_input(db_session, admin_session):
    with pytest.raises(InvalidInput):
        await task_service.complete_task(db_session, admin_session, str(2**31))
    with pytest.raises(InvalidInput):
        await task_service.create_task(db_session, admin_session, "pallet_builder", 2**31, PALLET)
    with pytest.raises(InvalidInput):
        await user_service.create_employee(db_session, admin_session, "x" * 256, "5678")
