"""
Fixtures for scholarship applications tests.
"""

import io
import json
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest
from fastapi import UploadFile

from scholarship_portal.modules.applications.models import ApplicationStatus, Document


@pytest.fixture
def payload_dict():
    """A realistic applicant payload."""
    return {
        "user_id": 7,
        "scheme_id": 3,
        "amount_applied": "25000",
        "full_name": "Asha Raman",
        "father_name": "K. Raman",
        "annual_income": "180000",
        "institution": "Government Arts College",
        "activities": ["NSS volunteer", "debate club"],
    }


@pytest.fixture
def payload_json(payload_dict):
    return json.dumps(payload_dict)


@pytest.fixture
def make_upload():
    """Factory for in-memory multipart uploads."""

    def _make(content: bytes = b"\xff\xd8\xff fake jpeg", filename: str = "photo.jpg"):
        return UploadFile(file=io.BytesIO(content), filename=filename)

    return _make


@pytest.fixture
def submitted_at():
    return datetime(2026, 6, 1, 9, 30, tzinfo=UTC)


@pytest.fixture
def detail_row(submitted_at, payload_json):
    """Row shape returned by ``repository.get_detail``."""
    return {
        "id": 42,
        "user_id": 7,
        "scheme_id": 3,
        "application_date": submitted_at,
        "amount_applied": Decimal("25000.00"),
        "data_json": payload_json,
        "status": ApplicationStatus.PENDING,
        "scheme_name": "Post-Matric Scholarship",
        "scholarship_name": "State Merit Award",
        "amount": Decimal("30000.00"),
    }


@pytest.fixture
def photo_document(submitted_at):
    return Document(
        id=1,
        application_id=42,
        doc_type="photo",
        filename="3f1c0a9e5b7d4c21a8e6f0b2d4c6e8a1",
        uploaded_at=submitted_at,
    )


@pytest.fixture
def pending_rows(submitted_at):
    """Review queue rows, oldest first."""
    return [
        {
            "id": 40,
            "application_date": submitted_at - timedelta(days=2),
            "status": ApplicationStatus.PENDING,
            "applicant_name": "Ravi Kumar",
            "applicant_email": "ravi@example.com",
            "scheme_name": "Post-Matric Scholarship",
        },
        {
            "id": 42,
            "application_date": submitted_at,
            "status": ApplicationStatus.PENDING,
            "applicant_name": "Asha Raman",
            "applicant_email": "asha@example.com",
            "scheme_name": None,
        },
    ]
