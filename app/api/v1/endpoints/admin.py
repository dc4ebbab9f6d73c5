# app/api/v1/endpoints/admin.py
from fastapi import APIRouter, Depends, HTTPException, status

from app.core.security import get_current_admin
from app.models.user import User
from app.workers.queue import (
    enqueue_counter_reconciliation,
    enqueue_orphan_sweep,
    fetch_job_status,
)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/maintenance/orphans", status_code=status.HTTP_202_ACCEPTED)
def schedule_orphan_sweep(current_admin: User = Depends(get_current_admin)):
    job_id = enqueue_orphan_sweep()
    return {"job_id": job_id, "task": "orphan sweep"}


@router.post("/maintenance/reconcile", status_code=status.HTTP_202_ACCEPTED)
def schedule_counter_reconciliation(current_admin: User = Depends(get_current_admin)):
    job_id = enqueue_counter_reconciliation()
    return {"job_id": job_id, "task": "counter reconciliation"}


@router.get("/maintenance/jobs/{job_id}")
def get_maintenance_job(job_id: str, current_admin: User = Depends(get_current_admin)):
    job = fetch_job_status(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return job
