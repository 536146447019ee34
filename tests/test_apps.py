"""Tests for the Flask front end."""

import io

import pandas as pd

from conftest import make_student


def form_data(**overrides):
    data = make_student()
    data.update(overrides)
    return data


def test_index_redirects(client):
    response = client.get("/")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/students")


def test_empty_list(client):
    response = client.get("/students")

    assert response.status_code == 200
    assert b"Register a Student" in response.data
    assert b'<span id="countBadge">0</span>' in response.data


def test_add_student(client, manager):
    response = client.post("/students", data=form_data(), follow_redirects=True)

    assert response.status_code == 200
    assert b"Added Ann Lee" in response.data
    assert manager.all_students() == [make_student()]


def test_add_sanitizes_input(client, manager):
    client.post("/students", data=form_data(contact="98765-43210", studentId=" 101 "))

    assert manager.get(0)["contact"] == "9876543210"
    assert manager.get(0)["studentId"] == "101"


def test_invalid_submit_shows_all_errors(client, manager):
    response = client.post("/students", data=form_data(email="nope", contact="123"))

    assert response.status_code == 400
    assert b"Enter a valid email address." in response.data
    assert b"Contact must be at least 10 digits." in response.data
    assert len(manager) == 0


def test_duplicate_id_rejected(client, manager):
    manager.add(make_student())

    response = client.post("/students", data=form_data(name="Bob Ray"))

    assert response.status_code == 400
    assert b"Student ID must be unique." in response.data
    assert len(manager) == 1


def test_edit_and_update(client, manager):
    manager.add(make_student())
    manager.add(make_student(name="Bob Ray", student_id="202"))

    response = client.get("/edit/1", follow_redirects=True)
    assert b"Update Student" in response.data
    assert b'value="Bob Ray"' in response.data

    response = client.post("/students", data=form_data(name="Bobby Ray", studentId="202"), follow_redirects=True)

    assert b"Updated Bobby Ray" in response.data
    assert [s["name"] for s in manager.all_students()] == ["Ann Lee", "Bobby Ray"]
    with client.session_transaction() as sess:
        assert "edit_position" not in sess


def test_edit_unknown_position_is_404(client):
    response = client.get("/edit/3")

    assert response.status_code == 404
    assert b"Page not found" in response.data


def test_delete_edited_record_resets_form(client, manager):
    manager.add(make_student())
    client.get("/edit/0")

    response = client.post("/delete/0", follow_redirects=True)

    assert b"Deleted Ann Lee" in response.data
    assert b"Register a Student" in response.data
    assert len(manager) == 0
    with client.session_transaction() as sess:
        assert "edit_position" not in sess


def test_delete_unknown_position_is_404(client):
    assert client.post("/delete/0").status_code == 404


def test_reset_leaves_edit_mode(client, manager):
    manager.add(make_student())
    client.get("/edit/0")

    response = client.post("/reset", follow_redirects=True)

    assert b"Form reset" in response.data
    assert b"Register a Student" in response.data


def test_search_filters_and_renumbers(client, manager):
    for i, name in enumerate(["Ann", "Bob", "Carl"]):
        manager.add(make_student(name=name, student_id=str(100 + i)))

    response = client.get("/students?q=carl")

    assert b"Carl" in response.data
    assert b"Bob" not in response.data
    assert b'<span id="countBadge">1</span>' in response.data


def test_many_rows_make_table_scrollable(client, manager):
    for i in range(8):
        manager.add(make_student(student_id=str(i)))

    response = client.get("/students")

    assert b"table-wrapper scrollable" in response.data


def test_clear_all(client, manager):
    manager.add(make_student())

    response = client.post("/clear", follow_redirects=True)

    assert b"All records cleared" in response.data
    assert len(manager) == 0


def test_clear_all_when_empty_is_quiet(client):
    response = client.post("/clear", follow_redirects=True)

    assert response.status_code == 200
    assert b"All records cleared" not in response.data


def test_export(client, manager):
    manager.add(make_student())

    response = client.get("/export")

    assert response.status_code == 200
    assert "students.xlsx" in response.headers["Content-Disposition"]
    df = pd.read_excel(io.BytesIO(response.data), dtype=str)
    assert df.iloc[0]["name"] == "Ann Lee"


def test_delete_prompt_escapes_loaded_values(client, manager):
    manager.add(make_student(name="O'Neil", student_id="1');alert('x"))

    response = client.get("/students")

    assert b"O\\u0027Neil" in response.data
    assert b"O'Neil" not in response.data
    assert b"alert('x" not in response.data
