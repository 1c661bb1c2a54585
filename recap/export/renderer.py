"""
Document export for summaries.

PDF output is an HTML page rendered with Jinja2 and laid out by WeasyPrint.
DOCX output is built with python-docx.
"""
import io
import re
from dataclasses import dataclass

from docx import Document
from docx.shared import Pt
from jinja2 import Environment, BaseLoader, select_autoescape

from recap.errors import ExportFailed, ValidationFailed
from recap.utils.logger import get_logger
from recap.utils.text import strip_markup

logger = get_logger(__name__)

PDF_MIMETYPE = "application/pdf"
DOCX_MIMETYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

EXPORT_FORMATS = ("pdf", "docx")

PDF_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
    @page { size: A4; margin: 20mm; }
    body { font-family: Helvetica, Arial, sans-serif; font-size: 12pt; line-height: 1.5; color: #222; }
    h1 { font-size: 16pt; margin: 0 0 8pt 0; }
    .meta { font-size: 10pt; color: #555; margin-bottom: 14pt; }
    .content { white-space: pre-wrap; }
</style>
</head>
<body>
    <h1>{{ title }}</h1>
    <div class="meta">
        Generated: {{ generated }}<br>
        Word Count: {{ word_count }} words<br>
        Tone: {{ tone }}
    </div>
    <div class="content">{{ content }}</div>
</body>
</html>"""


@dataclass
class ExportedDocument:
    """A rendered summary ready to be sent as an attachment."""
    content: bytes
    filename: str
    mimetype: str


def safe_filename(title: str, extension: str) -> str:
    """Build an attachment filename from a summary title."""
    base = re.sub(r'[\\/:*?"<>|\r\n]+', '', title or '').strip() or "summary"
    return f"{base}.{extension}"


class ExportRenderer:
    """Renders summaries to downloadable documents."""

    def __init__(self):
        self.env = Environment(
            loader=BaseLoader(),
            autoescape=select_autoescape(['html', 'xml'], default_for_string=True)
        )
        self.pdf_template = self.env.from_string(PDF_TEMPLATE)

    def render(self, summary, fmt: str) -> ExportedDocument:
        if fmt == "pdf":
            return ExportedDocument(self.render_pdf(summary), safe_filename(summary.title, "pdf"), PDF_MIMETYPE)
        if fmt == "docx":
            return ExportedDocument(self.render_docx(summary), safe_filename(summary.title, "docx"), DOCX_MIMETYPE)
        raise ValidationFailed(f"Unsupported export format: {fmt}")

    def render_html(self, summary) -> str:
        """Printable HTML used as the PDF source."""
        return self.pdf_template.render(
            title=summary.title,
            generated=_format_date(summary.created_at),
            word_count=summary.word_count,
            tone=summary.tone,
            content=strip_markup(summary.summary_content),
        )

    def render_pdf(self, summary) -> bytes:
        try:
            # Imported here: WeasyPrint loads native libraries on import
            from weasyprint import HTML
            pdf = HTML(string=self.render_html(summary)).write_pdf()
        except Exception as e:
            logger.error(f"PDF generation failed for summary {summary.id}: {e}")
            raise ExportFailed(f"Failed to generate PDF: {e}")

        logger.info(f"Rendered PDF for summary {summary.id} ({len(pdf)} bytes)")
        return pdf

    def render_docx(self, summary) -> bytes:
        try:
            doc = Document()

            title_run = doc.add_paragraph().add_run(summary.title)
            title_run.bold = True
            title_run.font.size = Pt(14)

            doc.add_paragraph().add_run(f"Generated: {_format_date(summary.created_at)}").font.size = Pt(10)
            doc.add_paragraph().add_run(
                f"Word Count: {summary.word_count} words | Tone: {summary.tone}"
            ).font.size = Pt(10)
            doc.add_paragraph("")

            for line in strip_markup(summary.summary_content).split("\n"):
                doc.add_paragraph().add_run(line).font.size = Pt(12)

            buffer = io.BytesIO()
            doc.save(buffer)
        except Exception as e:
            logger.error(f"DOCX generation failed for summary {summary.id}: {e}")
            raise ExportFailed(f"Failed to generate DOCX: {e}")

        logger.info(f"Rendered DOCX for summary {summary.id}")
        return buffer.getvalue()


def _format_date(value) -> str:
    return value.strftime("%Y-%m-%d") if value else ""
