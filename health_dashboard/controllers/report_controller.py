from flask import current_app, send_file

from health_dashboard.ai import AIClientError
from health_dashboard.errors import NotFoundError
from health_dashboard.extensions import ai_client
from health_dashboard.helpers import int_arg, resolve_user_id
from health_dashboard.services import metrics_service
from health_dashboard.services.report_service import ReportService

RECENT_INSIGHTS = 10


def _report_service():
    return ReportService(
        temp_dir=current_app.config["REPORT_TEMP_DIR"],
        cleanup_delay=current_app.config["REPORT_CLEANUP_DELAY"],
    )


def _send_and_cleanup(service, path, filename, mimetype):
    response = send_file(path, mimetype=mimetype, as_attachment=True, download_name=filename)
    response.call_on_close(lambda: service.schedule_cleanup(path))
    return response


def pdf_report():
    user_id = resolve_user_id()
    days = int_arg("days", 30)

    metrics = [m.readings() for m in metrics_service.metrics_for_window(user_id, days)]
    insights = [i.to_history_entry() for i in metrics_service.recent_insights(user_id, RECENT_INSIGHTS)]

    ai_summary = None
    if metrics:
        try:
            ai_summary = ai_client.summarize_report(metrics, insights)
        except AIClientError:
            current_app.logger.warning("Failed to generate AI summary for report", exc_info=True)

    service = _report_service()
    filename, path = service.write_pdf(user_id, metrics, insights, ai_summary=ai_summary, days=days)
    current_app.logger.info("PDF report generated for user %s", user_id)
    return _send_and_cleanup(service, path, filename, "application/pdf")


def csv_report():
    user_id = resolve_user_id()
    days = int_arg("days", 30)

    metrics = [m.readings() for m in metrics_service.metrics_for_window(user_id, days)]
    if not metrics:
        raise NotFoundError("No health data available")

    service = _report_service()
    filename, path = service.write_csv(user_id, metrics)
    current_app.logger.info("CSV report generated for user %s", user_id)
    return _send_and_cleanup(service, path, filename, "text/csv")
