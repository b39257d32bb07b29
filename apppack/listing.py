"""
PDF overview of a packaged project: folder tree plus a file index.

Meant to travel next to the zip so the generated project can be reviewed
(or handed back to an LLM) without unpacking it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor, white
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, Preformatted, SimpleDocTemplate, Spacer, Table, TableStyle

from .archive import ArchiveFolder
from .file_utils import build_tree, line_count_from_text

log = logging.getLogger(__name__)

ACCENT = HexColor("#3B6EA5")
HEADER_BG = HexColor("#2D3E50")
ROW_ALT_BG = HexColor("#F3F5F8")
MUTED = HexColor("#888888")


def _fmt_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


class ListingRenderer:
    def __init__(self, root: ArchiveFolder):
        self.root = root
        self.page_width, self.page_height = A4
        self.margin = 15 * mm
        self.content_width = self.page_width - 2 * self.margin
        self._styles = getSampleStyleSheet()

    def _style(self, name: str, parent_name: str = "Normal", **kwargs) -> ParagraphStyle:
        return ParagraphStyle(name, parent=self._styles[parent_name], **kwargs)

    def _page_footer(self, canvas, doc):
        canvas.saveState()
        canvas.setFont("Helvetica", 7)
        canvas.setFillColor(HexColor("#999999"))
        canvas.drawString(self.margin, 10 * mm, f"apppack · {self.root.name}")
        canvas.drawRightString(self.page_width - self.margin, 10 * mm, f"Page {doc.page}")
        canvas.restoreState()

    def build_story(self) -> list:
        files = self.root.file_entries()
        folder_prefix = f"{self.root.name}/"
        folders = [
            p[len(folder_prefix):]
            for p in self.root.handle.paths()
            if p.startswith(folder_prefix) and p.endswith("/") and p != folder_prefix
        ]
        cw = self.content_width
        story: list = []

        story.append(Paragraph(
            escape(self.root.name),
            self._style("LTitle", "Title", fontSize=24, textColor=ACCENT, spaceAfter=4 * mm),
        ))
        story.append(Paragraph(
            f"Packaged Project Overview · Generated {datetime.now().strftime('%Y-%m-%d %H:%M')}",
            self._style("LSub", fontSize=10, textColor=MUTED, spaceAfter=6 * mm),
        ))

        decoded = {p: data.decode("utf-8", errors="replace") for p, data in files.items()}
        total_lines = sum(line_count_from_text(t) for t in decoded.values())
        total_size = sum(len(data) for data in files.values())
        summary = Table(
            [["FILES", "LINES", "SIZE"], [str(len(files)), f"{total_lines:,}", _fmt_size(total_size)]],
            colWidths=[cw / 3] * 3,
        )
        summary.setStyle(TableStyle([
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("TEXTCOLOR", (0, 0), (-1, 0), MUTED),
            ("FONTSIZE", (0, 0), (-1, 0), 8),
            ("FONTNAME", (0, 1), (-1, 1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 1), (-1, 1), 16),
            ("TEXTCOLOR", (0, 1), (-1, 1), ACCENT),
            ("TOPPADDING", (0, 1), (-1, 1), 6),
        ]))
        story.append(summary)
        story.append(Spacer(1, 8 * mm))

        heading = self._style("LHead", "Heading2", textColor=HEADER_BG, spaceAfter=3 * mm)
        story.append(Paragraph("Folder Tree", heading))
        tree = build_tree([*folders, *files], self.root.name, style="ascii")
        story.append(Preformatted(tree, self._style("LTree", "Code", fontSize=7, leading=9)))
        story.append(Spacer(1, 6 * mm))

        story.append(Paragraph("File Index", heading))
        ns = self._style("LCell", fontSize=8)
        rows = [[
            Paragraph("<b>#</b>", ns),
            Paragraph("<b>Path</b>", ns),
            Paragraph("<b>Lines</b>", ns),
            Paragraph("<b>Size</b>", ns),
        ]]
        for idx, (path, data) in enumerate(files.items(), start=1):
            rows.append([
                Paragraph(f"{idx:03d}", ns),
                Paragraph(escape(path), ns),
                Paragraph(f"{line_count_from_text(decoded[path]):,}", ns),
                Paragraph(_fmt_size(len(data)), ns),
            ])
        index_table = Table(rows, colWidths=[cw * 0.08, cw * 0.62, cw * 0.14, cw * 0.16], repeatRows=1)
        index_table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
            ("TEXTCOLOR", (0, 0), (-1, 0), white),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [white, ROW_ALT_BG]),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("TOPPADDING", (0, 0), (-1, -1), 3),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ]))
        story.append(index_table)
        return story

    def render(self, out_path: Path) -> Path:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        doc = SimpleDocTemplate(
            str(out_path), pagesize=A4,
            leftMargin=self.margin, rightMargin=self.margin,
            topMargin=self.margin, bottomMargin=15 * mm,
            title=f"{self.root.name} listing",
        )
        doc.build(self.build_story(), onFirstPage=self._page_footer, onLaterPages=self._page_footer)
        log.info("Listing: %s", out_path.resolve())
        return out_path


def render_listing(root: ArchiveFolder, out_path: str | Path) -> Path:
    return ListingRenderer(root).render(Path(out_path))
