from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Project:
    """Project assignment returned by login; carries the employee's department."""

    project_code: str
    department: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Project":
        return cls(project_code=str(payload.get("projectCode") or ""), department=str(payload["department"]))


@dataclass(frozen=True)
class Credentials:
    """Identity and bearer token issued by the login flow."""

    employee_id: str
    token: str
    username: Optional[str] = None
    projects: tuple[Project, ...] = ()

    @property
    def department(self) -> Optional[str]:
        """Department of the first project, the one attendance is checked against."""
        return self.projects[0].department if self.projects else None

    def __repr__(self) -> str:
        return f"Credentials(employee_id={self.employee_id!r}, username={self.username!r})"
