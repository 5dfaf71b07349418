# schemas.py

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Severity = Literal["error", "warning", "info"]


class CamelModel(BaseModel):
    """Base for models exchanged with the UI and IRIS: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValueModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# --- Shipping Instruction ---

class SIRecord(CamelModel):
    """A Shipping Instruction as handed over by the extraction step.

    Business fields are optional so that missing values surface as
    REQUIRED_FIELD issues instead of parse errors. Wrongly typed values
    still fail construction. Unknown keys, such as a posted-back
    validationResult, are ignored.
    """
    id: Optional[str] = None
    file_name: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    # pending | extracted | validated | submitted
    status: str = "extracted"

    # Shipper
    shipper_name: Optional[str] = None
    shipper_address: Optional[str] = None
    shipper_contact: Optional[str] = None

    # Consignee
    consignee_name: Optional[str] = None
    consignee_address: Optional[str] = None
    consignee_contact: Optional[str] = None

    # Cargo
    cargo_description: Optional[str] = None
    container_number: Optional[str] = None
    weight: Optional[float] = None
    weight_unit: str = "KG"  # KG | LBS
    volume: Optional[float] = None
    volume_unit: str = "CBM"  # CBM | CFT

    # Shipping details
    port_of_loading: Optional[str] = None
    port_of_discharge: Optional[str] = None
    vessel_name: Optional[str] = None
    voyage_number: Optional[str] = None
    booking_number: Optional[str] = None

    # Dates
    cargo_ready_date: Optional[str] = None
    requested_ship_date: Optional[str] = None


# --- Validation output ---

class AutoFixResult(ValueModel):
    field: str
    original_value: str
    fixed_value: str
    reason: str


class ValidationIssue(ValueModel):
    field: str
    severity: Severity
    message: str
    code: str
    suggestion: Optional[str] = None


class ValidationMetadata(ValueModel):
    total_fields: int
    valid_fields: int
    invalid_fields: int
    warning_fields: int
    auto_fixed_fields: int


class ValidationResult(ValueModel):
    is_valid: bool
    issues: List[ValidationIssue] = Field(default_factory=list)
    auto_fixes: List[AutoFixResult] = Field(default_factory=list)
    metadata: ValidationMetadata


# --- IRIS payload ---

class IrisParty(CamelModel):
    name: str
    address: str
    contact: str


class IrisMeasure(CamelModel):
    value: float
    unit: str


class IrisCargo(CamelModel):
    description: str
    container_number: str
    weight: IrisMeasure
    volume: IrisMeasure


class IrisShippingDetails(CamelModel):
    port_of_loading: str
    port_of_discharge: str
    vessel_name: Optional[str] = None
    voyage_number: Optional[str] = None


class IrisDates(CamelModel):
    cargo_ready: str
    requested_ship_date: str


class IrisShippingInstruction(CamelModel):
    booking_number: str
    shipper: IrisParty
    consignee: IrisParty
    cargo: IrisCargo
    shipping: IrisShippingDetails
    dates: IrisDates


class IrisSubmissionRequest(CamelModel):
    shipping_instruction: IrisShippingInstruction
    submitted_by: str
    timestamp: str


class IrisError(CamelModel):
    code: str
    field: Optional[str] = None
    message: str
    severity: Literal["error", "warning"] = "error"


class IrisSubmissionResponse(CamelModel):
    """Defines the schema for IRIS's answer to a submission."""
    success: bool
    reference_number: str = ""
    status: Literal["accepted", "rejected", "pending"]
    message: str = ""
    timestamp: str = ""
    errors: Optional[List[IrisError]] = None


# --- Submission tracking ---

SubmissionStatus = Literal["draft", "validating", "submitting", "submitted", "failed"]


class SubmissionError(CamelModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class SubmissionProgress(CamelModel):
    current_step: str
    step_index: int
    total_steps: int
    message: str


class SubmissionResult(CamelModel):
    success: bool
    submission_id: str
    reference_number: Optional[str] = None
    timestamp: datetime
    error: Optional[SubmissionError] = None


class SubmitRequest(CamelModel):
    data: Optional[SIRecord] = None
    user_id: str = "anonymous"


class Submission(CamelModel):
    id: str
    si_data_id: Optional[str] = None
    user_id: str
    status: SubmissionStatus = "draft"
    reference_number: Optional[str] = None
    submitted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    error_message: Optional[str] = None
    retry_count: int = 0
    progress: Optional[SubmissionProgress] = None
    iris_response: Optional[IrisSubmissionResponse] = None


# --- Batch jobs ---

class JobStatus(BaseModel):
    """Defines the schema for a batch job's status response."""
    job_id: str
    status: str
    details: str
    total_records: int = 0
    records_processed: int = 0
    progress_percent: float = 0.0
    result_path: Optional[str] = None
