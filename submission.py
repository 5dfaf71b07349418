# submission.py

from datetime import datetime
from typing import Any, Dict, Optional

from api_client import IRISClient
from config import SUBMISSION_STEPS
from iris_rules import fix_and_validate_for_iris
from schemas import (
    IrisCargo, IrisDates, IrisMeasure, IrisParty, IrisShippingDetails, IrisShippingInstruction,
    IrisSubmissionRequest, IrisSubmissionResponse, SIRecord, Submission, SubmissionError,
    SubmissionProgress, SubmissionResult
)
from utils import log, new_id

iris_client = IRISClient()

# In-process stand-in for a submission store, keyed by submission id.
submissions: Dict[str, Submission] = {}


def build_iris_instruction(record: SIRecord) -> IrisShippingInstruction:
    """Maps a flat, validated SI record onto the nested IRIS payload."""
    return IrisShippingInstruction(
        booking_number=record.booking_number,
        shipper=IrisParty(
            name=record.shipper_name, address=record.shipper_address, contact=record.shipper_contact
        ),
        consignee=IrisParty(
            name=record.consignee_name, address=record.consignee_address, contact=record.consignee_contact
        ),
        cargo=IrisCargo(
            description=record.cargo_description,
            container_number=record.container_number,
            weight=IrisMeasure(value=record.weight, unit=record.weight_unit),
            volume=IrisMeasure(value=record.volume, unit=record.volume_unit),
        ),
        shipping=IrisShippingDetails(
            port_of_loading=record.port_of_loading,
            port_of_discharge=record.port_of_discharge,
            vessel_name=record.vessel_name or None,
            voyage_number=record.voyage_number or None,
        ),
        dates=IrisDates(cargo_ready=record.cargo_ready_date, requested_ship_date=record.requested_ship_date),
    )


def _advance(submission: Submission, step: str, message: str, now: datetime):
    submission.progress = SubmissionProgress(
        current_step=step, step_index=SUBMISSION_STEPS.index(step), total_steps=len(SUBMISSION_STEPS), message=message
    )
    submission.updated_at = now
    log.info(f"[Submission:{submission.id}] Step '{step}': {message}")


def _fail(
    submission: Submission, code: str, message: str, now: datetime, details: Optional[Dict[str, Any]] = None
) -> SubmissionResult:
    submission.status = "failed"
    submission.error_message = message
    submission.updated_at = now
    submission.progress = None
    log.warning(f"[Submission:{submission.id}] Failed with {code}: {message}")
    return SubmissionResult(
        success=False,
        submission_id=submission.id,
        timestamp=now,
        error=SubmissionError(code=code, message=message, details=details),
    )


async def submit_to_iris(
    record: SIRecord,
    user_id: str,
    now: datetime,
    client: IRISClient,
    store: Optional[Dict[str, Submission]] = None,
) -> SubmissionResult:
    """
    Runs the submission workflow: final validation, IRIS call, confirmation.

    IRIS is only contacted when the auto-fixed record has no validation
    errors. Failures are reported in the returned result, not raised.
    """
    store = submissions if store is None else store
    submission = Submission(
        id=new_id("sub"), si_data_id=record.id, user_id=user_id, status="validating",
        created_at=now, updated_at=now,
    )
    store[submission.id] = submission

    _advance(submission, "preparing", "Preparing data for submission...", now)

    _advance(submission, "validating", "Running final validation checks...", now)
    fixed_record, validation = fix_and_validate_for_iris(record, now)
    if not validation.is_valid:
        return _fail(
            submission, "VALIDATION_ERRORS",
            f"Shipping instruction has {validation.metadata.invalid_fields} invalid field(s).",
            now, details={"validationResult": validation.model_dump(by_alias=True, mode="json")},
        )

    submission.status = "submitting"
    _advance(submission, "submitting", "Submitting to IRIS API...", now)
    request = IrisSubmissionRequest(
        shipping_instruction=build_iris_instruction(fixed_record),
        submitted_by=user_id,
        timestamp=now.isoformat(),
    )
    response = await client.submit(request, context=f"Submission:{submission.id}")

    if not isinstance(response, IrisSubmissionResponse):
        submission.retry_count += 1
        return _fail(
            submission, "IRIS_API_ERROR", "Unable to process submission. Please try again.", now,
            details={"reason": response.get("error", "Unknown IRIS failure.")},
        )

    submission.iris_response = response
    if not response.success or response.status == "rejected":
        return _fail(
            submission, "SUBMISSION_FAILED", response.message or "Submission rejected by IRIS", now,
            details={"errors": [e.model_dump(by_alias=True) for e in response.errors or []]},
        )

    _advance(submission, "confirming", "Confirming submission...", now)
    submission.status = "submitted"
    submission.reference_number = response.reference_number
    submission.submitted_at = now
    submission.progress = None
    log.info(f"[Submission:{submission.id}] Accepted by IRIS with reference {response.reference_number}.")

    return SubmissionResult(
        success=True,
        submission_id=submission.id,
        reference_number=response.reference_number,
        timestamp=now,
    )
