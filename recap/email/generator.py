"""
Email body generator for shared meeting summaries.
"""
import html

from recap.utils.text import strip_markup


class EmailGenerator:
    """Builds the plain-text and HTML bodies of a summary email."""

    def generate_text(self, summary, sender_name: str) -> str:
        """
        Generate the plain-text body.

        Args:
            summary: Summary being shared
            sender_name: Name of the user sharing it

        Returns:
            Plain-text email body
        """
        return (
            f"{summary.title}\n\n"
            f"{strip_markup(summary.summary_content)}\n\n"
            f"Shared by {sender_name}"
        )

    def generate_html(self, summary, sender_name: str, pdf_attached: bool = False) -> str:
        """
        Generate the HTML body.

        Args:
            summary: Summary being shared
            sender_name: Name of the user sharing it
            pdf_attached: Whether the message carries the PDF export

        Returns:
            HTML email body
        """
        content = html.escape(strip_markup(summary.summary_content))
        content = content.replace("\n\n", "</p><p>").replace("\n", "<br>")

        attachment_note = ""
        if pdf_attached:
            attachment_note = "<p>The summary is also attached as a PDF.</p>"

        return f"""<!DOCTYPE html>
<html>
<head>
    <style>
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px; }}
        .header {{ border-bottom: 2px solid #4f46e5; padding-bottom: 10px; margin-bottom: 20px; }}
        .header h1 {{ margin: 0; color: #4f46e5; font-size: 22px; }}
        .meta {{ font-size: 12px; color: #666; }}
        .content {{ background: #f9f9f9; padding: 20px; border-radius: 8px; }}
        .footer {{ margin-top: 20px; padding-top: 10px; border-top: 1px solid #eee; font-size: 12px; color: #666; }}
        p {{ margin: 1em 0; }}
    </style>
</head>
<body>
    <div class="header">
        <h1>{html.escape(summary.title)}</h1>
        <p class="meta">{summary.word_count} words | Tone: {html.escape(summary.tone)}</p>
    </div>
    <div class="content">
        <p>{content}</p>
    </div>
    <div class="footer">
        <p>Shared by {html.escape(sender_name)}.</p>
        {attachment_note}
    </div>
</body>
</html>"""
