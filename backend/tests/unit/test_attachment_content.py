"""Unit tests for attachment content materialization

Tests cover:
- Dispatch by mime type (pdf, image, anything else)
- Kilobyte rounding and .svg filename derivation
- Byte stability for identical records
- Download header encoding
"""

from datetime import datetime, timezone
from urllib.parse import unquote

import pytest

from attachments.content import (
    SVG_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
    build_download_headers,
    resolve_attachment_content,
    size_in_kb,
    svg_filename,
)
from models.attachment import MatterAttachment


def attachment(**overrides) -> MatterAttachment:
    fields = dict(
        id=5,
        matter_id=1,
        original_name="scan.png",
        mime_type="image/png",
        file_size=2048,
        uploaded_at=datetime(2026, 3, 4, 12, 30, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return MatterAttachment(**fields)


class TestSizeInKb:

    @pytest.mark.parametrize("size,expected", [
        (0, 0),
        (511, 0),
        (512, 1),
        (1535, 1),
        (1536, 2),
        (2048, 2),
        (10 * 1024 * 1024, 10240),
    ])
    def test_rounding(self, size, expected):
        assert size_in_kb(size) == expected

    def test_negative_and_missing_sizes_are_zero(self):
        assert size_in_kb(-100) == 0
        assert size_in_kb(None) == 0


class TestSvgFilename:

    @pytest.mark.parametrize("name,expected", [
        ("scan.png", "scan.svg"),
        ("foto.da.obra.JPEG", "foto.da.obra.svg"),
        ("sem_extensao", "sem_extensao.svg"),
        ("", "anexo.svg"),
    ])
    def test_extension_replaced(self, name, expected):
        assert svg_filename(name) == expected


class TestResolveAttachmentContent:

    def test_image_becomes_svg_card(self):
        content = resolve_attachment_content(attachment())

        assert content.content_type == SVG_CONTENT_TYPE
        assert content.filename == "scan.svg"
        body = content.body.decode("utf-8")
        assert body.startswith("<svg")
        assert "scan.png" in body
        assert "2 KB" in body

    def test_image_name_is_xml_escaped(self):
        content = resolve_attachment_content(attachment(original_name="a<b>&c.png"))
        assert b"a&lt;b&gt;&amp;c.png" in content.body

    def test_pdf_keeps_type_and_name(self):
        content = resolve_attachment_content(
            attachment(original_name="Decreto (final).pdf", mime_type="application/pdf")
        )

        assert content.content_type == "application/pdf"
        assert content.filename == "Decreto (final).pdf"
        assert content.body.startswith(b"%PDF-1.4")
        assert content.body.rstrip().endswith(b"%%EOF")
        assert b"(Decreto \\(final\\).pdf) Tj" in content.body

    def test_pdf_xref_points_at_objects(self):
        body = resolve_attachment_content(attachment(mime_type="application/pdf")).body

        startxref = int(body.rsplit(b"startxref\n", 1)[1].split(b"\n", 1)[0])
        assert body[startxref:].startswith(b"xref\n")
        first_offset = int(body[startxref:].split(b"\n")[3][:10])
        assert body[first_offset:].startswith(b"1 0 obj")

    def test_pdf_detection_is_case_insensitive(self):
        content = resolve_attachment_content(attachment(mime_type="Application/PDF"))
        assert content.body.startswith(b"%PDF")

    def test_pdf_checked_before_image(self):
        """A mime type naming both goes down the pdf branch."""
        content = resolve_attachment_content(attachment(mime_type="image/pdf"))
        assert content.body.startswith(b"%PDF")
        assert content.content_type == "image/pdf"

    def test_other_types_get_text_descriptor(self):
        content = resolve_attachment_content(
            attachment(original_name="planilha.xlsx", mime_type="application/vnd.ms-excel", file_size=4321)
        )

        assert content.content_type == TEXT_CONTENT_TYPE
        assert content.filename == "planilha.xlsx"
        text = content.body.decode("utf-8")
        assert "Arquivo: planilha.xlsx" in text
        assert "Tipo: application/vnd.ms-excel" in text
        assert "Tamanho: 4321 bytes" in text
        assert "Enviado em: 2026-03-04T12:30:00+00:00" in text

    @pytest.mark.parametrize("mime_type", ["application/pdf", "image/jpeg", "text/csv"])
    def test_identical_records_give_identical_bytes(self, mime_type):
        first = resolve_attachment_content(attachment(mime_type=mime_type))
        second = resolve_attachment_content(attachment(mime_type=mime_type))
        assert first == second


class TestBuildDownloadHeaders:

    def test_headers_carry_declared_metadata(self):
        record = attachment()
        headers = build_download_headers(record, resolve_attachment_content(record))

        assert headers["Content-Disposition"] == "attachment; filename*=UTF-8''scan.svg"
        assert headers["X-File-Name"] == "scan.png"
        assert headers["X-File-Size"] == "2048"
        assert headers["X-File-Type"] == "image/png"

    def test_non_ascii_names_are_percent_encoded(self):
        record = attachment(original_name="Edição nº 3.pdf", mime_type="application/pdf")
        headers = build_download_headers(record, resolve_attachment_content(record))

        assert headers["X-File-Name"].isascii()
        assert unquote(headers["X-File-Name"]) == "Edição nº 3.pdf"
        assert headers["Content-Disposition"].isascii()
        assert unquote(headers["Content-Disposition"].split("''", 1)[1]) == "Edição nº 3.pdf"
