"""
Tests for the report export endpoint.
"""

import pytest
from datetime import date
from unittest.mock import Mock, AsyncMock
from fastapi.testclient import TestClient

from finance_app.config import settings
from finance_app.infrastructure.auth import AuthSession, get_current_session
from finance_app.infrastructure.web.dependencies import get_document_renderer, get_finance_repository
from finance_app.main import app

EXPORT_URL = f"{settings.api_prefix}/export"


@pytest.fixture
def repository(invoice_factory):
    repository = Mock()
    repository.list_invoices_in_range = AsyncMock(return_value=[invoice_factory()])
    repository.list_payments_in_range = AsyncMock(return_value=[])
    return repository


@pytest.fixture
def client(repository, renderer):
    app.dependency_overrides[get_finance_repository] = lambda: repository
    app.dependency_overrides[get_document_renderer] = lambda: renderer
    app.dependency_overrides[get_current_session] = lambda: AuthSession("user-1", "token")
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_requires_authentication(repository, renderer):
    app.dependency_overrides[get_finance_repository] = lambda: repository
    app.dependency_overrides[get_document_renderer] = lambda: renderer
    try:
        response = TestClient(app).post(EXPORT_URL, json={"type": "csv", "reportType": "invoice_report"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}
    repository.list_invoices_in_range.assert_not_awaited()


def test_csv_attachment(client):
    response = client.post(EXPORT_URL, json={
        "type": "csv",
        "reportType": "invoice_report",
        "dateRange": {"from": "2026-10-01", "to": "2026-10-31"},
    })

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == (
        f'attachment; filename="invoice_report_{date.today().isoformat()}.csv"'
    )
    assert response.content.startswith(b"Invoice Number,Title,Client,")


def test_excel_is_spreadsheet_typed(client):
    response = client.post(EXPORT_URL, json={"type": "excel", "reportType": "payment_report"})

    assert response.status_code == 200
    assert response.headers["content-type"] == (
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert response.headers["content-disposition"].endswith('.xlsx"')


def test_invalid_report_type(client, repository):
    response = client.post(EXPORT_URL, json={"type": "csv", "reportType": "bogus"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid report type"}
    repository.list_invoices_in_range.assert_not_awaited()


def test_invalid_export_type(client):
    response = client.post(EXPORT_URL, json={"type": "docx", "reportType": "invoice_report"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid export type"}


def test_missing_export_type(client, repository):
    response = client.post(EXPORT_URL, json={"reportType": "invoice_report"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid export type"}
    repository.list_invoices_in_range.assert_not_awaited()


def test_numeric_export_type(client):
    response = client.post(EXPORT_URL, json={"type": 5, "reportType": "invoice_report"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid export type"}


def test_null_report_type(client):
    response = client.post(EXPORT_URL, json={"type": "csv", "reportType": None})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid report type"}


def test_malformed_date_range(client, repository):
    response = client.post(EXPORT_URL, json={
        "type": "csv",
        "reportType": "invoice_report",
        "dateRange": {"from": "nope", "to": "2026-10-31"},
    })

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid date range"}
    repository.list_invoices_in_range.assert_not_awaited()


def test_tabular_export_of_visual_report(client):
    response = client.post(EXPORT_URL, json={"type": "csv", "reportType": "monthly_analysis"})

    assert response.status_code == 400
    assert "not supported" in response.json()["error"]


def test_data_failure_is_export_failed(client, repository):
    repository.list_invoices_in_range.side_effect = RuntimeError("connection reset")

    response = client.post(EXPORT_URL, json={"type": "csv", "reportType": "invoice_report"})

    assert response.status_code == 500
    assert response.json() == {"error": "Export failed"}


def test_health(client):
    response = client.get(f"{settings.api_prefix}/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
