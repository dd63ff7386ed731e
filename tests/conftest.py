"""Pytest configuration and fixtures."""

from collections.abc import Generator
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.backend.config import Settings, get_settings
from app.backend.main import app
from app.backend.services.answer_service import AnswerService, get_answer_service
from app.backend.services.payment_service import PaymentService, get_payment_service


def build_pdf(text: str) -> bytes:
    """
    Build a minimal one-page PDF showing ``text`` in Helvetica.

    Object offsets in the xref table are computed so the file is well formed.
    """
    content = b"BT /F1 12 Tf 72 720 Td (%s) Tj ET" % text.encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
        b"<< /Length %d >>\nstream\n%s\nendstream" % (len(content), content),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n%s\nendobj\n" % (number, body)

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


def make_completion(content: str | None) -> SimpleNamespace:
    """Build an object shaped like an OpenAI chat completion response."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir: Path) -> Settings:
    """Settings with test credentials, isolated from any .env file."""
    return Settings(
        _env_file=None,
        openai_api_key="sk-test",
        stripe_secret_key="sk_test_123",
        stripe_price_id="price_test_123",
        domain="https://contracts.example.com",
        upload_dir=upload_dir,
    )


@pytest.fixture
def payment_service(settings: Settings) -> PaymentService:
    return PaymentService.from_settings(settings)


@pytest.fixture
def openai_client() -> MagicMock:
    """A stand-in OpenAI client answering every question the same way."""
    client = MagicMock()
    client.chat.completions.create.return_value = make_completion(
        "  The term is 12 months.\n"
    )
    return client


@pytest.fixture
def answer_service(settings: Settings, openai_client: MagicMock) -> AnswerService:
    return AnswerService(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        client=openai_client,
    )


@pytest.fixture
def client(
    settings: Settings,
    payment_service: PaymentService,
    answer_service: AnswerService,
) -> Generator[TestClient, None, None]:
    """Create a test client with providers and settings swapped for fixtures."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_payment_service] = lambda: payment_service
    app.dependency_overrides[get_answer_service] = lambda: answer_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """A well-formed PDF containing a single line of contract text."""
    return build_pdf("Term: 12 months")


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"
