"""Tests for booking shipments and saving their package documents."""

from __future__ import annotations

import base64
import json

import httpx
import pytest

from transsmart.application.services.shipment_service import ShipmentService


def _doc(payload: bytes, fmt: str = "PDF") -> dict:
    return {"fileFormat": fmt, "data": base64.b64encode(payload).decode()}


@pytest.fixture
def service(client) -> ShipmentService:
    return ShipmentService(client)


def test_book_and_save_documents_writes_decoded_files(service, fake_api, tmp_path):
    shipments = [
        {"reference": "REF-1", "packageDocs": [_doc(b"%PDF-1 label")]},
        {"reference": "REF-2", "packageDocs": [_doc(b"^XA zpl", "ZPL"), _doc(b"%PDF-2 label")]},
    ]
    fake_api.api = lambda request: httpx.Response(200, json=shipments)

    written = service.book_and_save_documents([{"reference": "REF-1"}], tmp_path / "labels")

    assert [p.name for p in written] == ["REF-1.PDF", "REF-2-1.ZPL", "REF-2-2.PDF"]
    assert (tmp_path / "labels" / "REF-1.PDF").read_bytes() == b"%PDF-1 label"
    assert (tmp_path / "labels" / "REF-2-1.ZPL").read_bytes() == b"^XA zpl"

    (call,) = fake_api.calls
    assert call.url.path.endswith("/PRINT")
    assert json.loads(call.content) == [{"reference": "REF-1"}]


def test_save_documents_accepts_a_single_shipment(service, tmp_path):
    written = service.save_documents({"reference": "REF-9", "packageDocs": [_doc(b"x")]}, tmp_path)

    assert written == [tmp_path / "REF-9.PDF"]


def test_shipment_without_documents_writes_nothing(service, tmp_path):
    assert service.save_documents([{"reference": "REF-1"}], tmp_path) == []


def test_invalid_document_data_is_rejected(service, tmp_path):
    shipment = {"reference": "REF-1", "packageDocs": [{"fileFormat": "PDF", "data": "not base64!"}]}

    with pytest.raises(ValueError, match="REF-1"):
        service.save_documents([shipment], tmp_path)


def test_book_passes_action_through(service, fake_api):
    service.book([{"reference": "REF-1"}])

    (call,) = fake_api.calls
    assert call.url.path.endswith("/BOOK")


def test_file_format_is_used_as_returned(service, tmp_path):
    written = service.save_documents([{"reference": "REF-1", "packageDocs": [_doc(b"x", "pdf")]}], tmp_path)

    assert written == [tmp_path / "REF-1.pdf"]


def test_duplicate_references_are_rejected_before_writing(service, tmp_path):
    shipments = [
        {"reference": "REF-1", "packageDocs": [_doc(b"first")]},
        {"reference": "REF-1", "packageDocs": [_doc(b"second")]},
    ]

    with pytest.raises(ValueError, match="REF-1.PDF"):
        service.save_documents(shipments, tmp_path / "labels")

    assert not (tmp_path / "labels").exists()


def test_reference_with_path_separator_is_rejected(service, tmp_path):
    shipment = {"reference": "../REF-1", "packageDocs": [_doc(b"x")]}

    with pytest.raises(ValueError, match="file name"):
        service.save_documents([shipment], tmp_path / "labels")

    assert list(tmp_path.iterdir()) == []


def test_missing_file_format_is_rejected(service, tmp_path):
    shipment = {"reference": "REF-1", "packageDocs": [{"data": base64.b64encode(b"x").decode()}]}

    with pytest.raises(ValueError, match="fileFormat"):
        service.save_documents([shipment], tmp_path)
