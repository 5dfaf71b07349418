# main.py

import os
import shutil
import tempfile
import uuid
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI, File, UploadFile, HTTPException, BackgroundTasks, status, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from utils import log, setup_logger, is_supported_batch_file
from processing import process_batch_file_async
from submission import iris_client, submissions, submit_to_iris
from iris_rules import fix_and_validate_for_iris
from config import TEMP_DIR
from schemas import JobStatus, SIRecord, SubmitRequest, SubmissionResult, Submission

job_statuses: dict[str, JobStatus] = {}


class EndpointFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # Exclude logs from uvicorn.access for paths that start with /status
        return record.getMessage().find("/status/") == -1

# Filter out /status/ GET requests
logging.getLogger("uvicorn.access").addFilter(EndpointFilter())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown events."""
    os.makedirs(TEMP_DIR, exist_ok=True)
    setup_logger()
    log.info("Application starting up...")
    yield
    log.info("Application shutting down: Closing IRIS client...")
    await iris_client.close()

app = FastAPI(
    title="Shipping Instruction Validation Service",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allows all origins
    allow_methods=["*"],  # Allows all methods
    allow_headers=["*"],  # Allows all headers
)


def _error_response(status_code: int, error: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error, "code": code})


@app.post("/api/si/validate")
async def validate_si(request: Request):
    """Auto-fixes and validates one SI record. Business feedback is carried in `result.issues`."""
    try:
        body = await request.json()
        data = body.get("data") if isinstance(body, dict) else None
        if data is None or (not data and not isinstance(data, dict)):
            return _error_response(status.HTTP_400_BAD_REQUEST, "Missing SI data", "INVALID_DATA")
        apply_auto_fix = body.get("applyAutoFix", True)

        now = datetime.now()
        record = SIRecord.model_validate(data)
        fixed_record, result = fix_and_validate_for_iris(record, now)

        if apply_auto_fix:
            response_data = fixed_record.model_dump(by_alias=True, mode="json")
            response_data["validationResult"] = {
                "isValid": result.is_valid,
                "validatedAt": now.isoformat(),
                "autoFixesApplied": len(result.auto_fixes),
            }
        else:
            response_data = data

        log.info(f"[Record:{record.id or 'N/A'}] Validation finished: is_valid={result.is_valid}, "
                 f"errors={result.metadata.invalid_fields}, warnings={result.metadata.warning_fields}")
        return {
            "success": True,
            "result": result.model_dump(by_alias=True, mode="json"),
            "data": response_data,
        }
    except Exception:
        log.exception("Validation request failed.")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Validation failed", "VALIDATION_FAILED")


@app.post("/api/si/submit", response_model=SubmissionResult)
async def submit_si(request: SubmitRequest):
    """Validates an SI record and, if it has no errors, submits it to IRIS."""
    if request.data is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing SI data")
    return await submit_to_iris(request.data, request.user_id, datetime.now(), iris_client)


@app.get("/api/si/submissions/{submission_id}", response_model=Submission)
async def get_submission(submission_id: str):
    submission = submissions.get(submission_id)
    if not submission:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission ID not found.")
    return submission


def cleanup_file(file_path: str):
    """Background task to delete a temporary file."""
    try:
        if file_path and os.path.exists(file_path):
            os.remove(file_path)
            log.info(f"Cleaned up temporary file: {file_path}")
    except OSError as e:
        log.error(f"Error cleaning up file {file_path}: {e}")

async def run_batch_job(job_id: str, temp_file_path: str):
    """A wrapper to run the batch validation and update job status."""
    try:
        output_csv_path = await process_batch_file_async(job_id, temp_file_path, job_statuses, datetime.now())
        job_statuses[job_id].status = "Completed"
        job_statuses[job_id].details = "Batch validation finished successfully."
        job_statuses[job_id].progress_percent = 100.0
        job_statuses[job_id].result_path = output_csv_path
        log.info(f"Job {job_id} completed. Report at {output_csv_path}")
    except Exception as e:
        log.exception(f"Job {job_id} failed with a critical error.")
        job_statuses[job_id].status = "Failed"
        job_statuses[job_id].details = f"A critical error occurred: {str(e)}"
    finally:
        cleanup_file(temp_file_path)

@app.post("/api/si/batch/", status_code=status.HTTP_202_ACCEPTED)
async def create_batch_job(background_tasks: BackgroundTasks, file: UploadFile = File(...)):
    """Accepts a JSON export of SI records, starts a background validation job, and returns a job ID."""
    if not file.filename or not is_supported_batch_file(file.filename):
        raise HTTPException(status_code=400, detail="Invalid file type. Please upload a JSON file.")

    os.makedirs(TEMP_DIR, exist_ok=True)
    try:
        with tempfile.NamedTemporaryFile(delete=False, suffix=".json", dir=TEMP_DIR) as temp_file:
            shutil.copyfileobj(file.file, temp_file)
            temp_file_path = temp_file.name
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Could not save file: {e}")
    finally:
        await file.close()

    job_id = str(uuid.uuid4())
    job_statuses[job_id] = JobStatus(
        job_id=job_id, status="Queued", details="Job has been queued for processing."
    )

    background_tasks.add_task(run_batch_job, job_id, temp_file_path)

    log.info(f"Job {job_id} started for file {file.filename}.")
    return {"message": "Job started successfully.", "job_id": job_id}

@app.get("/status/{job_id}", response_model=JobStatus)
async def get_job_status(job_id: str):
    """Retrieves the status of a batch job by its ID."""
    job = job_statuses.get(job_id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job ID not found.")
    return job

@app.get("/health")
async def health():
    return {"status": "ok"}

@app.get("/")
async def root():
    return {
        "message": "Welcome to the Shipping Instruction Validation API",
        "version": app.version,
        "docs_url": "/docs"
    }
