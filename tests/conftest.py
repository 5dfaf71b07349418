"""Shared fixtures for the SI validation test suite."""

from datetime import datetime
from typing import Any, Dict

import pytest

from schemas import SIRecord


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time; every date-dependent assertion is relative to it."""
    return datetime(2025, 12, 1, 9, 30)


@pytest.fixture
def si_data() -> Dict[str, Any]:
    """A complete, well-formed SI record in wire (camelCase) form."""
    return {
        "id": "si_abc123",
        "fileName": "shipping_instruction_001.pdf",
        "uploadedAt": "2025-11-28T10:30:00Z",
        "status": "extracted",
        "shipperName": "Acme Corporation",
        "shipperAddress": "123 Main Street, New York, NY 10001",
        "shipperContact": "+1-555-123-4567",
        "consigneeName": "Global Logistics Inc",
        "consigneeAddress": "456 Market Street, San Francisco, CA 94102",
        "consigneeContact": "+65 6789 0123",
        "cargoDescription": "Electronic components and accessories",
        "containerNumber": "ABCD1234567",
        "weight": 15000,
        "weightUnit": "KG",
        "volume": 25,
        "volumeUnit": "CBM",
        "portOfLoading": "USNYC",
        "portOfDischarge": "CNSHA",
        "vesselName": "Ocean Voyager",
        "voyageNumber": "V123",
        "bookingNumber": "BOOK123456",
        "cargoReadyDate": "2099-12-20",
        "requestedShipDate": "2099-12-25",
    }


@pytest.fixture
def make_record(si_data):
    """Factory building an SIRecord from the well-formed data plus wire-name overrides."""
    def _make(**overrides) -> SIRecord:
        return SIRecord.model_validate({**si_data, **overrides})
    return _make
