"""
HTTP tests for the applicant and admin application endpoints.

The repository is patched; the service layer, dependency wiring, document
store and error envelope are real.
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

from scholarship_portal.core.config import Settings, get_settings
from scholarship_portal.main import app
from scholarship_portal.modules.applications.models import ApplicationStatus
from scholarship_portal.modules.users.models import User, UserRole

REPOSITORY = "scholarship_portal.modules.applications.service.repository"


class TestApply:
    """POST /api/apply"""

    def test_apply_with_photo(self, client, fake_database, document_store, payload_json):
        with patch(REPOSITORY) as mock_repo:
            mock_repo.create = AsyncMock(return_value=MagicMock(id=42))
            mock_repo.add_document = AsyncMock()

            response = client.post(
                "/api/apply",
                data={"data": payload_json},
                files={"photo": ("passport.jpg", b"jpeg-bytes", "image/jpeg")},
            )

        assert response.status_code == 200
        assert response.json() == {"success": True, "applicationId": 42}
        assert fake_database.committed is True

        doc_kwargs = mock_repo.add_document.await_args.kwargs
        assert doc_kwargs["doc_type"] == "photo"
        assert document_store.path_for(doc_kwargs["filename"]).read_bytes() == b"jpeg-bytes"

    def test_apply_without_files(self, client):
        with patch(REPOSITORY) as mock_repo:
            mock_repo.create = AsyncMock(return_value=MagicMock(id=43))
            mock_repo.add_document = AsyncMock()

            response = client.post(
                "/api/apply",
                data={"data": json.dumps({"user_id": 7, "scheme_id": 3})},
            )

        assert response.status_code == 200
        assert response.json()["applicationId"] == 43
        mock_repo.add_document.assert_not_awaited()

    def test_apply_missing_reference(self, client, document_store):
        response = client.post(
            "/api/apply",
            data={"data": json.dumps({"user_id": 7})},
            files={"photo": ("passport.jpg", b"jpeg-bytes", "image/jpeg")},
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "Missing user_id or scheme_id",
            "code": "MISSING_REFERENCE",
        }
        assert list(document_store.root.iterdir()) == []

    def test_apply_without_data_field(self, client):
        response = client.post("/api/apply")

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_REFERENCE"

    def test_apply_malformed_data(self, client):
        response = client.post("/api/apply", data={"data": "{user_id: 7"})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PAYLOAD"

    def test_apply_storage_failure(self, client, fake_database, document_store):
        with patch(REPOSITORY) as mock_repo:
            mock_repo.create = AsyncMock(return_value=MagicMock(id=44))
            mock_repo.add_document = AsyncMock(side_effect=RuntimeError("connection lost"))

            response = client.post(
                "/api/apply",
                data={"data": json.dumps({"user_id": 7, "scheme_id": 3})},
                files={"mark10": ("marks.pdf", b"%PDF-1.4", "application/pdf")},
            )

        assert response.status_code == 500
        assert response.json() == {"error": "Server error", "code": "SUBMISSION_FAILED"}
        assert fake_database.rolled_back is True
        assert list(document_store.root.iterdir()) == []


class TestApplicantViews:
    """GET /api/my-applications/{user_id} and GET /api/application/{id}"""

    def test_my_applications(self, client, submitted_at):
        rows = [
            {
                "application_id": 42,
                "scheme_name": "Post-Matric Scholarship",
                "scholarship_name": "State Merit Award",
                "application_date": submitted_at,
                "status": ApplicationStatus.REJECTED,
            }
        ]
        with patch(REPOSITORY) as mock_repo:
            mock_repo.get_for_user = AsyncMock(return_value=rows)

            response = client.get("/api/my-applications/7")

        assert response.status_code == 200
        applications = response.json()["applications"]
        assert len(applications) == 1
        assert applications[0]["application_id"] == 42
        assert applications[0]["status"] == "Rejected"

    def test_my_applications_empty(self, client):
        with patch(REPOSITORY) as mock_repo:
            mock_repo.get_for_user = AsyncMock(return_value=[])

            response = client.get("/api/my-applications/999")

        assert response.status_code == 200
        assert response.json() == {"applications": []}

    def test_application_detail(self, client, detail_row, photo_document):
        with patch(REPOSITORY) as mock_repo:
            mock_repo.get_detail = AsyncMock(return_value=detail_row)
            mock_repo.get_documents = AsyncMock(return_value=[photo_document])

            response = client.get("/api/application/42")

        assert response.status_code == 200
        body = response.json()
        assert body["application"]["id"] == 42
        assert body["application"]["status"] == "Pending"
        assert body["application"]["scheme_name"] == "Post-Matric Scholarship"
        assert [doc["doc_type"] for doc in body["documents"]] == ["photo"]

    def test_application_not_found(self, client):
        with patch(REPOSITORY) as mock_repo:
            mock_repo.get_detail = AsyncMock(return_value=None)

            response = client.get("/api/application/999")

        assert response.status_code == 404
        assert response.json() == {
            "error": "Application 999 not found",
            "code": "APPLICATION_NOT_FOUND",
        }

    def test_non_integer_id_is_validation_error(self, client):
        response = client.get("/api/application/abc")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestAdminEndpoints:
    """/api/admin/* with the default (open) admin policy."""

    def test_stats(self, client):
        with (
            patch(REPOSITORY) as mock_repo,
            patch("scholarship_portal.modules.applications.service.UserRepository") as users,
            patch("scholarship_portal.modules.applications.service.SchemeRepository") as schemes,
        ):
            users.count = AsyncMock(return_value=120)
            schemes.count = AsyncMock(return_value=8)
            mock_repo.count_by_status = AsyncMock(return_value=15)

            response = client.get("/api/admin/stats")

        assert response.status_code == 200
        assert response.json() == {
            "total_users": 120,
            "total_schemes": 8,
            "pending_applications": 15,
        }

    def test_pending_applications(self, client, pending_rows):
        with patch(REPOSITORY) as mock_repo:
            mock_repo.get_pending_for_admin = AsyncMock(return_value=pending_rows)

            response = client.get("/api/admin/pending-applications")

        assert response.status_code == 200
        applications = response.json()["applications"]
        assert [a["id"] for a in applications] == [40, 42]
        assert applications[0]["applicant_name"] == "Ravi Kumar"

    def test_approve(self, client):
        with patch(REPOSITORY) as mock_repo:
            mock_repo.set_status = AsyncMock(return_value=1)

            response = client.post("/api/admin/application/42/approve")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["status"] == "Approved"
        assert body["updated"] is True

    def test_approve_nonexistent_application(self, client):
        with patch(REPOSITORY) as mock_repo:
            mock_repo.set_status = AsyncMock(return_value=0)

            response = client.post("/api/admin/application/999999/approve")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["updated"] is False

    def test_reject_after_approve(self, client):
        """Decisions are unconditional: a decided application can be re-decided."""
        with patch(REPOSITORY) as mock_repo:
            mock_repo.set_status = AsyncMock(return_value=1)

            first = client.post("/api/admin/application/42/approve")
            second = client.post("/api/admin/application/42/reject")

        assert first.json()["status"] == "Approved"
        assert second.json()["status"] == "Rejected"
        statuses = [c.args[2] for c in mock_repo.set_status.await_args_list]
        assert statuses == [ApplicationStatus.APPROVED, ApplicationStatus.REJECTED]

    def test_database_error_is_500(self, client):
        with patch(REPOSITORY) as mock_repo:
            mock_repo.set_status = AsyncMock(side_effect=RuntimeError("deadlock"))

            response = client.post("/api/admin/application/42/reject")

        assert response.status_code == 500
        assert response.json() == {"error": "Server error", "code": "INTERNAL_ERROR"}


class TestAdminPolicyEnforced:
    """/api/admin/* with ENFORCE_ADMIN_ROLE switched on."""

    @staticmethod
    def enforce():
        app.dependency_overrides[get_settings] = lambda: Settings(enforce_admin_role=True)

    def test_missing_header_is_401(self, client):
        self.enforce()

        response = client.get("/api/admin/stats")

        assert response.status_code == 401
        assert response.json()["code"] == "AUTHENTICATION_REQUIRED"

    def test_unknown_user_is_401(self, client, mock_db):
        self.enforce()
        mock_db.get.return_value = None

        response = client.get("/api/admin/stats", headers={"X-User-Id": "77"})

        assert response.status_code == 401

    def test_student_is_403(self, client, mock_db):
        self.enforce()
        mock_db.get.return_value = User(id=7, name="Asha", email="a@x.org", role=UserRole.USER)

        response = client.post(
            "/api/admin/application/42/approve", headers={"X-User-Id": "7"}
        )

        assert response.status_code == 403
        assert response.json()["code"] == "ADMIN_ACCESS_REQUIRED"

    def test_admin_is_admitted(self, client, mock_db):
        self.enforce()
        mock_db.get.return_value = User(id=1, name="Admin", email="root@x.org", role=UserRole.ADMIN)

        with patch(REPOSITORY) as mock_repo:
            mock_repo.set_status = AsyncMock(return_value=1)

            response = client.post(
                "/api/admin/application/42/approve", headers={"X-User-Id": "1"}
            )

        assert response.status_code == 200
        assert response.json()["updated"] is True
