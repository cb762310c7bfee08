"""Example: validate a position and read today's status without a UI.

Set API_BASE_URL (and APP_ENV) in the environment or a .env file first.
"""

import asyncio

from src.campus_attendance.campus_attendance.auth.model import Credentials, Project
from src.campus_attendance.campus_attendance.geo.model import GeoPoint
from src.campus_attendance.campus_attendance.main import create_client


async def main():
    credentials = Credentials(
        employee_id="EMP001",
        token="replace-me",
        projects=(Project(project_code="P-1", department="Dept3"),),
    )
    container = create_client(credentials=credentials)

    store = container.attendance_store
    await store.initialize()

    dept = container.zones.resolve(store.department)
    result = container.validation_engine.validate(dept.center, store.department, store.location_mode)
    print(result.is_valid, result.reason, result.details.user_location_label)

    outside = container.validation_engine.validate(GeoPoint(lat=0.0, lng=0.0), store.department, None)
    print(outside.reason)

    print(store.status_label())
    store.stop_polling()


if __name__ == "__main__":
    asyncio.run(main())
