"""Attachment content materialization.

Attachment bytes are not stored by this service, so downloads are served a
deterministic placeholder derived from the attachment record. The durable
contract is the content-type and filename policy:

- mime type containing "pdf": single-page PDF showing the file name;
  content type and filename unchanged
- mime type containing "image": SVG card with the file name and size in KB;
  content type image/svg+xml, filename extension replaced with .svg
- anything else: plain-text descriptor; content type text/plain

A real blob store may replace the byte generation but must keep these rules.
"""

import os
from dataclasses import dataclass
from typing import Dict
from urllib.parse import quote
from xml.sax.saxutils import escape

from models.attachment import MatterAttachment

SVG_CONTENT_TYPE = "image/svg+xml"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
FALLBACK_BASENAME = "anexo"


@dataclass(frozen=True)
class MaterializedContent:
    body: bytes
    content_type: str
    filename: str


def size_in_kb(file_size: int) -> int:
    """Bytes to kilobytes, rounding half up (2048 → 2, 1536 → 2, 1535 → 1)."""
    return (max(int(file_size or 0), 0) + 512) // 1024


def svg_filename(original_name: str) -> str:
    base, _ = os.path.splitext(original_name or "")
    return f"{base or FALLBACK_BASENAME}.svg"


def _pdf_escape(text: str) -> bytes:
    escaped = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
    # Standard Type1 fonts use WinAnsi; accented Portuguese names survive latin-1
    return escaped.encode("latin-1", errors="replace")


def render_pdf(original_name: str) -> bytes:
    """Minimal valid one-page PDF with the file name as visible text."""
    stream = b"BT /F1 14 Tf 72 720 Td (" + _pdf_escape(original_name) + b") Tj ET"
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length " + str(len(stream)).encode("ascii") + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += str(number).encode("ascii") + b" 0 obj\n" + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 " + str(len(objects) + 1).encode("ascii") + b"\n"
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode("ascii")
    out += b"trailer\n<< /Size " + str(len(objects) + 1).encode("ascii") + b" /Root 1 0 R >>\n"
    out += b"startxref\n" + str(xref_offset).encode("ascii") + b"\n%%EOF\n"
    return bytes(out)


def render_svg(original_name: str, file_size: int) -> bytes:
    """Placeholder image card with the file name and its size in KB."""
    name = escape(original_name or FALLBACK_BASENAME)
    svg = (
        '<svg xmlns="http://www.w3.org/2000/svg" width="400" height="300" viewBox="0 0 400 300">\n'
        '  <rect x="1" y="1" width="398" height="298" fill="#f3f4f6" stroke="#9ca3af"/>\n'
        f'  <text x="200" y="140" font-family="sans-serif" font-size="16" text-anchor="middle" fill="#374151">{name}</text>\n'
        f'  <text x="200" y="170" font-family="sans-serif" font-size="12" text-anchor="middle" fill="#6b7280">{size_in_kb(file_size)} KB</text>\n'
        '</svg>\n'
    )
    return svg.encode("utf-8")


def render_text_descriptor(attachment: MatterAttachment) -> bytes:
    uploaded_at = attachment.uploaded_at.isoformat() if attachment.uploaded_at else "-"
    lines = [
        f"Arquivo: {attachment.original_name}",
        f"Tipo: {attachment.mime_type}",
        f"Tamanho: {attachment.file_size} bytes",
        f"Enviado em: {uploaded_at}",
    ]
    return ("\n".join(lines) + "\n").encode("utf-8")


def resolve_attachment_content(attachment: MatterAttachment) -> MaterializedContent:
    """Derive body, content type and filename for an authorized download.

    Same record in, same bytes out.
    """
    mime_type = (attachment.mime_type or "").lower()

    if "pdf" in mime_type:
        return MaterializedContent(
            body=render_pdf(attachment.original_name),
            content_type=attachment.mime_type,
            filename=attachment.original_name,
        )

    if "image" in mime_type:
        return MaterializedContent(
            body=render_svg(attachment.original_name, attachment.file_size),
            content_type=SVG_CONTENT_TYPE,
            filename=svg_filename(attachment.original_name),
        )

    return MaterializedContent(
        body=render_text_descriptor(attachment),
        content_type=TEXT_CONTENT_TYPE,
        filename=attachment.original_name,
    )


def build_download_headers(attachment: MatterAttachment, content: MaterializedContent) -> Dict[str, str]:
    """Response headers carrying the declared metadata.

    X-File-* echo what was uploaded even when Content-Type was coerced.
    """
    return {
        "Content-Disposition": f"attachment; filename*=UTF-8''{quote(content.filename, safe='')}",
        "X-File-Name": quote(attachment.original_name, safe=""),
        "X-File-Size": str(attachment.file_size),
        "X-File-Type": attachment.mime_type,
    }
