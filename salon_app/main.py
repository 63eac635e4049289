from datetime import date, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from salon_app.db import init_db
from salon_app.routes.appointments import router as appointments_router
from salon_app.routes.availability import router as availability_router
from salon_app.routes.employees import router as employees_router
from salon_app.routes.schedule import router as schedule_router
from salon_app.routes.time_records import router as time_records_router
from salon_app.tasks import availability_snapshot

app = FastAPI(title="salon-app", version="0.1.0")

# Giao diện quầy lễ tân gọi thẳng API, không qua proxy
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    init_db()


@app.get("/health")
def health():
    return {"ok": True, "service": "salon-app"}


class SnapshotRequest(BaseModel):
    day: date | None = None
    now: str | None = None  # HH:MM


@app.post("/tasks/availability-snapshot")
def enqueue_availability_snapshot(req: SnapshotRequest):
    current = datetime.now()
    day = (req.day or current.date()).isoformat()
    now = req.now or current.strftime("%H:%M")
    result = availability_snapshot.delay(day, now)
    return {"task_id": result.id}


app.include_router(employees_router)
app.include_router(appointments_router)
app.include_router(schedule_router)
app.include_router(availability_router)
app.include_router(time_records_router)
