# iris_rules.py

from datetime import date, datetime
from typing import Dict, List, Tuple, Union

import auto_fix
import validators
from schemas import SIRecord, ValidationIssue, ValidationMetadata, ValidationResult
from utils import log
from validation_rules import BUSINESS_FIELDS, VALIDATION_RULES, FieldRule, is_empty


def count_filled_fields(record: SIRecord) -> int:
    return sum(1 for field in BUSINESS_FIELDS if not is_empty(getattr(record, field)))


def _summarize(record: SIRecord, issues: List[ValidationIssue], fix_count: int) -> ValidationMetadata:
    total_fields = count_filled_fields(record)
    invalid_fields = len({issue.field for issue in issues if issue.severity == "error"})
    return ValidationMetadata(
        total_fields=total_fields,
        valid_fields=total_fields - invalid_fields,
        invalid_fields=invalid_fields,
        warning_fields=sum(1 for issue in issues if issue.severity == "warning"),
        auto_fixed_fields=fix_count,
    )


def fix_and_validate_for_iris(
    record: SIRecord, now: Union[datetime, date], rules: Dict[str, FieldRule] = VALIDATION_RULES
) -> Tuple[SIRecord, ValidationResult]:
    """Auto-fixes, validates the fixed record, and returns it together with the result."""
    fixed_record, fixes = auto_fix.fix(record)
    issues = validators.validate(fixed_record, now, rules)

    result = ValidationResult(
        is_valid=not any(issue.severity == "error" for issue in issues),
        issues=issues,
        auto_fixes=fixes,
        metadata=_summarize(fixed_record, issues, len(fixes)),
    )
    log.debug(
        f"[Record:{record.id or 'N/A'}] Validated: is_valid={result.is_valid}, "
        f"issues={len(issues)}, auto_fixes={len(fixes)}"
    )
    return fixed_record, result


def validate_for_iris(
    record: SIRecord, now: Union[datetime, date], rules: Dict[str, FieldRule] = VALIDATION_RULES
) -> ValidationResult:
    """Validates an SI record against the IRIS submission rules. Errors from malformed input propagate."""
    return fix_and_validate_for_iris(record, now, rules)[1]
