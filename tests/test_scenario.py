from models.user import Role


def test_manager_assigns_employee_completes_admin_deletes(client, headers, users):
    manager, employee, admin = headers[Role.MANAGE], headers[Role.EMPLOYEE], headers[Role.ADMIN]

    res = client.post(
        "/api/tasks",
        json={
            "title": "Prepare release notes",
            "description": "Summarize changes since the last release",
            "assigned_to_user_id": str(users[Role.EMPLOYEE].id),
            "due_date": "2026-11-06T17:00:00",
        },
        headers=manager,
    )
    assert res.status_code == 201, res.text
    created = res.json()
    task_url = f"/api/tasks/{created['id']}"

    res = client.put(task_url, json={"status": "Done"}, headers=employee)
    assert res.status_code == 204

    fetched = client.get(task_url, headers=employee).json()
    assert fetched["status"] == "Done"
    assert {k: v for k, v in fetched.items() if k != "status"} == {
        k: v for k, v in created.items() if k != "status"
    }

    assert client.delete(task_url, headers=admin).status_code == 204
    assert client.get(task_url, headers=admin).status_code == 404
