# health_dashboard/services/report_service.py
"""
Health report rendering.

Writes PDF or CSV exports for a user's recent metrics into a shared temporary
directory. Files are named per user and timestamp and removed a fixed delay
after they have been sent.
"""
import csv
import logging
import os
import threading
import time
from datetime import datetime
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from health_dashboard.utils.health_utils import calculate_risk_score, risk_level, summarize_metrics

logger = logging.getLogger(__name__)

CSV_COLUMNS = (
    ("date", "Date"),
    ("heartRate", "Heart Rate (bpm)"),
    ("steps", "Steps"),
    ("sleepHours", "Sleep (hours)"),
    ("sugarLevel", "Blood Sugar (mg/dL)"),
    ("bloodPressureSystolic", "BP Systolic"),
    ("bloodPressureDiastolic", "BP Diastolic"),
    ("weight", "Weight (kg)"),
)


def _blank(value):
    return "" if value is None else value


class ReportService:
    def __init__(self, temp_dir, cleanup_delay=5.0):
        self.temp_dir = temp_dir
        self.cleanup_delay = cleanup_delay

    def build_path(self, user_id, extension):
        os.makedirs(self.temp_dir, exist_ok=True)
        filename = f"health-report-{user_id}-{int(time.time() * 1000)}.{extension}"
        return filename, os.path.join(self.temp_dir, filename)

    def schedule_cleanup(self, path):
        timer = threading.Timer(self.cleanup_delay, self.remove_file, args=(path,))
        timer.daemon = True
        timer.start()
        return timer

    @staticmethod
    def remove_file(path):
        try:
            os.remove(path)
        except OSError:
            logger.warning("Failed to clean up report file %s", path, exc_info=True)

    # ------------------------------------------------------------------ CSV

    def write_csv(self, user_id, metrics):
        """``metrics`` are reading dicts, oldest first."""
        filename, path = self.build_path(user_id, "csv")
        try:
            with open(path, "w", newline="", encoding="utf-8") as fh:
                writer = csv.writer(fh)
                writer.writerow([title for _, title in CSV_COLUMNS])
                for metric in metrics:
                    bp = metric.get("bloodPressure") or {}
                    row = dict(metric, bloodPressureSystolic=bp.get("systolic"), bloodPressureDiastolic=bp.get("diastolic"))
                    writer.writerow([_blank(row.get(key)) for key, _ in CSV_COLUMNS])
        except Exception:
            self.remove_file(path)
            raise
        return filename, path

    # ------------------------------------------------------------------ PDF

    def _styles(self):
        styles = getSampleStyleSheet()
        styles.add(ParagraphStyle("ReportTitle", parent=styles["Title"], fontSize=20, spaceAfter=6))
        styles.add(ParagraphStyle("Centered", parent=styles["Normal"], alignment=1))
        styles.add(ParagraphStyle("Section", parent=styles["Heading2"], spaceBefore=12, spaceAfter=6))
        return styles

    def write_pdf(self, user_id, metrics, insights, ai_summary=None, days=30):
        """
        Render the PDF report.

        Args:
            metrics: reading dicts for the window, oldest first
            insights: recent insight dicts (query, aiResponse, category, createdAt)
            ai_summary: narrative summary text from the AI client, or None
        """
        filename, path = self.build_path(user_id, "pdf")
        styles = self._styles()
        story = [
            Paragraph("Health Report", styles["ReportTitle"]),
            Paragraph(f"Generated: {datetime.now().strftime('%Y-%m-%d')}", styles["Centered"]),
            Paragraph(f"Reporting period: last {days} days", styles["Centered"]),
            Spacer(1, 0.6 * cm),
        ]

        story.append(Paragraph("Executive Summary", styles["Section"]))
        paragraphs = [p.strip() for p in (ai_summary or "").split("\n\n") if p.strip()]
        if paragraphs:
            for text in paragraphs:
                story.append(Paragraph(escape(text).replace("\n", "<br/>"), styles["Normal"]))
                story.append(Spacer(1, 0.2 * cm))
        else:
            story.append(Paragraph("Health data collected over the reporting period.", styles["Normal"]))

        story.append(Paragraph("Metrics Overview", styles["Section"]))
        if metrics:
            stats = summarize_metrics(metrics)
            rows = [
                ["Metric", "Average"],
                ["Heart Rate", f"{stats['avgHeartRate']:.1f} bpm"],
                ["Steps", f"{stats['avgSteps']:.0f} steps/day"],
                ["Sleep", f"{stats['avgSleep']:.1f} hours/night"],
                ["Blood Sugar", f"{stats['avgSugar']:.1f} mg/dL"],
                ["Days Recorded", str(stats["totalDays"])],
            ]
            table = Table(rows, colWidths=[6 * cm, 6 * cm])
            table.setStyle(TableStyle([
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2563eb")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.lightgrey),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ]))
            story.append(table)

            latest = calculate_risk_score(metrics[-1])
            story.append(Paragraph("Rule-Based Risk Assessment", styles["Section"]))
            story.append(Paragraph(
                f"Latest score: {latest.risk_score}/100 ({risk_level(latest.risk_score)})", styles["Normal"],
            ))
            for factor in latest.factors:
                story.append(Paragraph(f"&bull; {factor}", styles["Normal"]))
        else:
            story.append(Paragraph("No metrics available for this period.", styles["Normal"]))

        if insights:
            story.append(Paragraph("Recent Assistant Conversations", styles["Section"]))
            for insight in insights:
                story.append(Paragraph(
                    f"<b>[{escape(str(insight.get('category', 'general')))}]</b> {escape(str(insight.get('query', '')))}", styles["Normal"],
                ))

        try:
            SimpleDocTemplate(path, pagesize=A4, leftMargin=2 * cm, rightMargin=2 * cm).build(story)
        except Exception:
            self.remove_file(path)
            raise
        return filename, path
