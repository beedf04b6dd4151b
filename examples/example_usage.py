"""Example: using the service layer directly (no Flask).

Controllers are a thin layer; the attendance rules live in the services.
"""

from datetime import date, datetime

from attendance_tracker.container import build_container
from attendance_tracker.database.seed import seed_demo_data


def main():
    container = build_container(storage_backend="memory")
    seed_demo_data(container.user_service, container.attendance_service, today=date.today())

    me = container.user_service.register(
        name="Dana Example", email="dana@company.com", password="secret123", department="Engineering"
    )
    now = datetime.now()
    container.attendance_service.check_in(me.user_id, now=now.replace(hour=9, minute=15, second=0))
    print(container.attendance_service.check_out(me.user_id, now=now.replace(hour=17, minute=0, second=0)).to_dict())
    print(container.analytics_service.manager_dashboard().to_dict())


if __name__ == "__main__":
    main()
