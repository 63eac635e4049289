import os
from pathlib import Path

from sqlmodel import Session, SQLModel, create_engine


def _default_sqlite_url() -> str:
    # Mặc định đặt DB ở ./data/salon.db (chạy docker thì trỏ APP_DATA_DIR vào volume)
    data_dir = Path(os.environ.get("APP_DATA_DIR", "data"))
    data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{(data_dir / 'salon.db').as_posix()}"


DATABASE_URL = os.environ.get("DATABASE_URL") or _default_sqlite_url()

connect_args = {}
if DATABASE_URL.startswith("sqlite:"):
    connect_args = {"check_same_thread": False}

engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)


def init_db() -> None:
    SQLModel.metadata.create_all(engine)
    _sqlite_light_migrate()


def _sqlite_light_migrate() -> None:
    # DB cũ (bản đầu chưa có lịch làm việc / staff_id): bổ sung cột còn thiếu cho SQLite
    if not DATABASE_URL.startswith("sqlite:"):
        return

    with engine.connect() as conn:

        def existing_cols(table: str) -> set[str]:
            try:
                rows = conn.exec_driver_sql(f"PRAGMA table_info({table})").fetchall()
            except Exception:
                return set()
            return {r[1] for r in rows}  # (cid, name, type, notnull, dflt_value, pk)

        employee_cols = existing_cols("employee")
        appointment_cols = existing_cols("appointment")

        def add_col(cols: set[str], sql: str, col_name: str) -> None:
            if not cols or col_name in cols:
                return
            conn.exec_driver_sql(sql)

        add_col(employee_cols, "ALTER TABLE employee ADD COLUMN work_schedule JSON", "work_schedule")
        add_col(employee_cols, "ALTER TABLE employee ADD COLUMN specialties JSON", "specialties")
        add_col(employee_cols, "ALTER TABLE employee ADD COLUMN assigned_services JSON", "assigned_services")
        add_col(appointment_cols, "ALTER TABLE appointment ADD COLUMN staff_id INTEGER", "staff_id")

        conn.commit()


def get_session():
    with Session(engine) as session:
        yield session
