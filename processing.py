# processing.py

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
from pydantic import ValidationError

from config import TEMP_DIR, REPORT_COLUMN_ORDER, REPORT_CHUNK_SIZE
from iris_rules import validate_for_iris
from schemas import JobStatus, SIRecord, ValidationResult
from utils import log, load_batch_records


def _append_to_csv(results_list: List[Dict], output_path: Path, column_order: List[str]):
    if not results_list: return
    df = pd.DataFrame(results_list)
    for col in column_order:
        if col not in df.columns: df[col] = None
    df = df[[col for col in column_order if col in df.columns]]
    df.to_csv(output_path, mode='a', header=not output_path.exists(), index=False, encoding='utf-8')
    log.info(f"Appended {len(results_list)} row(s) to {output_path}")


def _join_issues(result: ValidationResult, severity: str) -> str:
    return "; ".join(f"{i.field}: {i.code}" for i in result.issues if i.severity == severity)


def build_report_row(index: int, raw: Any, now: datetime) -> Dict[str, Any]:
    """Validates one raw record and flattens the outcome into a report row."""
    raw_dict = raw if isinstance(raw, dict) else {}
    row = {
        "RECORD_Index": index,
        "RECORD_Id": raw_dict.get("id"),
        "RECORD_FileName": raw_dict.get("fileName"),
    }
    try:
        record = SIRecord.model_validate(raw)
        result = validate_for_iris(record, now)
    except (ValidationError, TypeError, ValueError) as e:
        log.warning(f"[Record:{index}] Could not validate record: {e.__class__.__name__}")
        row["Processing_Status"] = f"Failed: {e.__class__.__name__}"
        return row

    row.update({
        "Processing_Status": "Success",
        "VALIDATION_IsValid": result.is_valid,
        "VALIDATION_TotalFields": result.metadata.total_fields,
        "VALIDATION_ValidFields": result.metadata.valid_fields,
        "VALIDATION_InvalidFields": result.metadata.invalid_fields,
        "VALIDATION_WarningFields": result.metadata.warning_fields,
        "VALIDATION_AutoFixedFields": result.metadata.auto_fixed_fields,
        "VALIDATION_Errors": _join_issues(result, "error"),
        "VALIDATION_Warnings": _join_issues(result, "warning"),
        "VALIDATION_AutoFixes": "; ".join(f"{f.field}: {f.reason}" for f in result.auto_fixes),
    })
    return row


async def process_batch_file_async(job_id: str, batch_file_path: str, job_statuses: Dict[str, JobStatus], now: datetime):
    job = job_statuses[job_id]
    output_csv_path = Path(TEMP_DIR) / f"{job_id}_report.csv"
    if output_csv_path.exists(): output_csv_path.unlink()
    try:
        records = load_batch_records(batch_file_path)
        if not records: raise ValueError("No SI records found in the batch file.")
        job.status, job.total_records = "Processing", len(records)
        job.details = f"Found {job.total_records} records to validate."
        log.info(f"Job {job_id}: {job.details}")

        pending_rows = []
        for index, raw in enumerate(records):
            pending_rows.append(build_report_row(index, raw, now))
            job.records_processed += 1
            job.progress_percent = (job.records_processed / job.total_records) * 100
            if len(pending_rows) >= REPORT_CHUNK_SIZE:
                _append_to_csv(pending_rows, output_csv_path, REPORT_COLUMN_ORDER)
                pending_rows = []
                job.details = f"Validated {job.records_processed}/{job.total_records} records."
                log.info(f"Job {job_id}: {job.details} - Progress: {job.progress_percent:.2f}%")
                await asyncio.sleep(0)
        _append_to_csv(pending_rows, output_csv_path, REPORT_COLUMN_ORDER)

    except Exception as e:
        log.exception(f"Job {job_id} failed: {e}")
        job.status, job.details = "Failed", str(e)
        raise
    return str(output_csv_path)
