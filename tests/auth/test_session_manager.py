import pytest

from src.campus_attendance.campus_attendance.auth.model import Credentials, Project
from src.campus_attendance.campus_attendance.auth.service import SessionManager
from src.campus_attendance.campus_attendance.core.exceptions import ValidationError


def test_sign_in_and_headers():
    session = SessionManager()
    assert session.auth_headers() == {}
    assert not session.is_authenticated

    session.sign_in(Credentials(employee_id="EMP001", token="tok"))

    assert session.employee_id == "EMP001"
    assert session.auth_headers() == {"Authorization": "Bearer tok"}


def test_sign_in_requires_employee_and_token():
    with pytest.raises(ValidationError):
        SessionManager().sign_in(Credentials(employee_id=" ", token="tok"))
    with pytest.raises(ValidationError):
        SessionManager().sign_in(Credentials(employee_id="EMP001", token=""))


def test_sign_out_notifies_listeners_once():
    calls = []
    session = SessionManager(Credentials(employee_id="EMP001", token="tok"))
    session.on_sign_out(lambda: calls.append("cleared"))

    session.sign_out()
    session.sign_out()

    assert calls == ["cleared"]
    assert session.employee_id is None


def test_credentials_repr_hides_token():
    assert "secret" not in repr(Credentials(employee_id="EMP001", token="secret"))


def test_project_payload_and_department():
    project = Project.from_payload({"projectCode": "P-9", "department": "Dept5"})

    assert Credentials(employee_id="EMP001", token="tok", projects=(project,)).department == "Dept5"
    assert Credentials(employee_id="EMP001", token="tok").department is None
