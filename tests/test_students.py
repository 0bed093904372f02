import pytest

from fees import StaffScope
from fees.errors import ValidationError
from server.data_access import link_key, update_student

pytestmark = pytest.mark.anyio

NEW_STUDENT = {
    "name": "Tendai Moyo",
    "class": "Grade 8A",
    "guardianName": "Ruth Moyo",
    "guardianPhone": "+263 77 999 0000",
    "guardianEmail": "ruth.moyo@email.com",
    "balance": 900,
}


async def test_staff_sees_all_students(seeded, staff):
    r = await seeded.get("/students", headers=staff)
    assert r.status_code == 200
    students = r.json()
    assert len(students) == 6
    michael = next(s for s in students if s["id"] == "1")
    assert michael["name"] == "Michael Chen"
    assert michael["class"] == "Grade 11B"
    assert michael["balance"] == 1250
    assert michael["status"] == "overdue"


async def test_parent_sees_only_linked_students(seeded, staff, register, store):
    # Another student with the same guardian name must stay hidden
    r = await seeded.post("/students", headers=staff, json={**NEW_STUDENT, "guardianName": "Linda Chen"})
    assert r.status_code == 200

    parent_id, parent = await register("someone@email.com", "parent", name="Linda Chen")
    await store.set(link_key(parent_id, "1"), True)

    r = await seeded.get("/students", headers=parent)
    assert r.status_code == 200
    assert [s["id"] for s in r.json()] == ["1"]


async def test_parent_without_links_sees_nothing(seeded, register):
    _, parent = await register("nobody@email.com", "parent")
    r = await seeded.get("/students", headers=parent)
    assert r.json() == []


async def test_parent_signup_links_by_guardian_email(seeded, register):
    _, parent = await register("linda.chen@email.com", "parent", name="Linda Chen")
    r = await seeded.get("/students", headers=parent)
    assert [s["id"] for s in r.json()] == ["1"]


async def test_create_student_links_matching_parent(client, staff, register):
    _, parent = await register("Ruth.Moyo@email.com", "parent", name="Ruth Moyo")
    r = await client.post("/students", headers=staff, json=NEW_STUDENT)
    assert r.status_code == 200
    created = r.json()
    assert created["status"] == "pending"
    assert created["balance"] == 900
    assert created["createdBy"]

    r = await client.get("/students", headers=parent)
    assert [s["id"] for s in r.json()] == [created["id"]]


async def test_create_student_requires_name_and_class(client, staff):
    r = await client.post("/students", headers=staff, json={"name": "No Class"})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required fields"}


async def test_parent_cannot_create_student(client, register):
    _, parent = await register("p@email.com", "parent")
    r = await client.post("/students", headers=parent, json=NEW_STUDENT)
    assert r.status_code == 403
    assert r.json() == {"error": "Forbidden"}


async def test_update_merges_partial_fields(seeded, staff):
    r = await seeded.put("/students/2", headers=staff, json={"balance": 500})
    assert r.status_code == 200
    updated = r.json()
    assert updated["balance"] == 500
    assert updated["name"] == "Sarah Williams"
    assert updated["guardianEmail"] == "john.williams@email.com"
    assert updated["status"] == "pending"
    assert updated["updatedBy"]

    r = await seeded.get("/students", headers=staff)
    stored = next(s for s in r.json() if s["id"] == "2")
    assert stored["balance"] == 500


async def test_update_missing_student(client, staff):
    r = await client.put("/students/404", headers=staff, json={"balance": 1})
    assert r.status_code == 404
    assert r.json() == {"error": "Student not found"}


async def test_parent_cannot_update_student(seeded, register):
    _, parent = await register("linda.chen@email.com", "parent")
    r = await seeded.put("/students/1", headers=parent, json={"balance": 0})
    assert r.status_code == 403


@pytest.mark.parametrize("field", ["name", "class", "balance", "status"])
async def test_update_rejects_null_for_required_fields(seeded, staff, field):
    r = await seeded.put("/students/2", headers=staff, json={field: None})
    assert r.status_code == 400
    assert "may not be null" in r.json()["error"]

    r = await seeded.get("/students", headers=staff)
    assert next(s for s in r.json() if s["id"] == "2")["name"] == "Sarah Williams"


async def test_update_may_clear_guardian_email(seeded, staff):
    r = await seeded.put("/students/2", headers=staff, json={"guardianEmail": None})
    assert r.status_code == 200
    assert r.json().get("guardianEmail") is None


async def test_merge_failure_maps_to_validation_error(store, seeded):
    identity = StaffScope(user_id="u1", name="Grace Moyo", email="bursar@school.test")
    with pytest.raises(ValidationError):
        await update_student(store, identity, "2", {"balance": "lots"})
