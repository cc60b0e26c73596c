"""
Integration tests for CSV import and export endpoints.
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from django.utils import timezone

from licenses.application.services.csv_import import IMPORT_COLUMNS, TEMPLATE_CSV
from licenses.infrastructure.models import License


@pytest.mark.django_db
@pytest.mark.integration
class TestImportAPI:
    """Integration tests for CSV import."""

    def test_import_multipart(self, auth_client, user):
        upload = SimpleUploadedFile("licenses.csv", TEMPLATE_CSV.encode(), "text/csv")

        response = auth_client.post(
            reverse("licenses:import"), {"file": upload}, format="multipart"
        )

        assert response.status_code == 201
        assert response.json() == {"imported_count": 2}
        imported = License.objects.filter(owner=user).order_by("product_name")
        assert [item.product_name for item in imported] == [
            "Adobe Creative Suite",
            "Microsoft Office",
        ]
        assert {item.location.name for item in imported} == {"Australia"}
        assert all(item.category_ref is not None for item in imported)

    def test_import_raw_body(self, auth_client, user):
        response = auth_client.post(
            reverse("licenses:import"), TEMPLATE_CSV, content_type="text/csv"
        )

        assert response.status_code == 201
        assert License.objects.filter(owner=user).count() == 2

    def test_invalid_rows_import_nothing(self, auth_client, user):
        payload = TEMPLATE_CSV + "\nZoom,Zoom,Software,abc,Weekly,Active,2024-01-01,,,,,,,"

        response = auth_client.post(
            reverse("licenses:import"), payload, content_type="text/csv"
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "CSV_VALIDATION_ERROR"
        assert error["details"] == [
            "Row 4: Valid amount is required",
            "Row 4: Billing cycle must be one of: "
            "Monthly, Quarterly, Semi-Annual, Annual, Biennial, One-time",
            "Row 4: Expiry date is required",
        ]
        assert License.objects.filter(owner=user).count() == 0

    @pytest.mark.parametrize("amount", ["1e30", "123456789012345"])
    def test_out_of_range_amount_is_a_row_error(self, auth_client, user, amount):
        payload = "\n".join(
            [
                ",".join(IMPORT_COLUMNS[:8]),
                f"Zoom,Zoom,Software,{amount},Annual,Active,2024-01-01,2024-12-31",
            ]
        )

        response = auth_client.post(
            reverse("licenses:import"), payload, content_type="text/csv"
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "CSV_VALIDATION_ERROR"
        assert error["details"] == ["Row 2: Valid amount is required"]
        assert License.objects.filter(owner=user).count() == 0

    def test_header_only_imports_nothing(self, auth_client):
        response = auth_client.post(
            reverse("licenses:import"), ",".join(IMPORT_COLUMNS), content_type="text/csv"
        )

        assert response.status_code == 201
        assert response.json() == {"imported_count": 0}

    def test_missing_file(self, auth_client):
        response = auth_client.post(reverse("licenses:import"), {}, format="multipart")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "NO_FILE"

    def test_template_download(self, auth_client):
        response = auth_client.get(reverse("licenses:import-template"))

        assert response.status_code == 200
        assert response["Content-Type"].startswith("text/csv")
        assert "license_import_template.csv" in response["Content-Disposition"]
        assert response.content.decode() == TEMPLATE_CSV


@pytest.mark.django_db
@pytest.mark.integration
class TestExportAPI:
    def test_export(self, auth_client, user, other_user, make_license):
        make_license(user, product_name="Photoshop", category="Design")
        make_license(user, product_name="Okta", category="Security")
        make_license(other_user, product_name="Not mine")

        response = auth_client.get(reverse("licenses:export"), {"category": "Design"})

        assert response.status_code == 200
        filename = f"licenses_{timezone.localdate().isoformat()}.csv"
        assert response["Content-Disposition"] == f'attachment; filename="{filename}"'
        lines = response.content.decode().split("\n")
        assert lines[0].startswith('"Product Name","Vendor"')
        assert len(lines) == 2
        assert lines[1].startswith('"Photoshop"')

    def test_export_requires_token(self, api_client):
        assert api_client.get(reverse("licenses:export")).status_code == 401
