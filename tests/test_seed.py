from sqlalchemy import select

from app.seed import DEFAULT_SEED_USERS, ensure_seed_users, seed_sample_data
from auth.security import verify_password
from models.task import Task
from models.user import Role, User


def test_seed_users_created_once(db):
    first = ensure_seed_users(db)
    second = ensure_seed_users(db)

    assert {role: u.id for role, u in first.items()} == {role: u.id for role, u in second.items()}
    assert len(db.execute(select(User)).scalars().all()) == len(DEFAULT_SEED_USERS)
    for email, _, role, password in DEFAULT_SEED_USERS:
        user = first[role]
        assert user.email == email
        assert verify_password(password, user.password_hash)


def test_seed_repairs_role_and_missing_hash(db):
    users = ensure_seed_users(db)
    manager = users[Role.MANAGE]
    manager.role = Role.EMPLOYEE
    manager.password_hash = None
    db.commit()

    ensure_seed_users(db)
    db.refresh(manager)
    assert manager.role is Role.MANAGE
    assert verify_password("Manager123!", manager.password_hash)


def test_seed_keeps_changed_password(db, client):
    ensure_seed_users(db)
    admin_headers = {"Authorization": "Bearer " + client.post(
        "/api/auth/login", json={"email": "admin@demo.com", "password": "Admin123!"}
    ).json()["token"]}
    employee = db.execute(select(User).where(User.email == "employee@demo.com")).scalar_one()
    client.put(
        f"/api/users/{employee.id}",
        json={"full_name": "Employee", "email": "employee@demo.com", "role": "Employee", "password": "Changed1!"},
        headers=admin_headers,
    )

    ensure_seed_users(db)
    db.expire_all()
    employee = db.execute(select(User).where(User.email == "employee@demo.com")).scalar_one()
    assert verify_password("Changed1!", employee.password_hash)


def test_sample_data_is_idempotent(db):
    counts = seed_sample_data(db)
    assert counts == {"users": 3, "teams": 1, "tasks": 3}
    assert seed_sample_data(db) == counts

    tasks = db.execute(select(Task)).scalars().all()
    assert all(t.team is not None for t in tasks)


def test_verify_password_rejects_bad_hashes():
    assert not verify_password("x", "")
    assert not verify_password("x", "not-a-bcrypt-hash")


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "healthy", "services": {"database": True}}
