"""HTTP trigger blueprint — health check and mailbox report endpoints."""

import json
import logging

import azure.functions as func

from mailbox_report import __version__
from mailbox_report.config import load_config
from mailbox_report.exchange.directory import MailboxLookupError
from mailbox_report.orchestration.report_builder import report_builder_from_config

logger = logging.getLogger(__name__)

bp = func.Blueprint()


def _json_response(payload: dict, status_code: int) -> func.HttpResponse:  # type: ignore[type-arg]
    return func.HttpResponse(
        json.dumps(payload), status_code=status_code, mimetype="application/json"
    )


@bp.route(route="health", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint.

    Returns service status and version.
    """
    logger.info("[health_check] health check requested")

    try:
        return _json_response({"status": "ok", "version": __version__}, 200)

    except Exception:
        logger.error("[health_check] health check failed", exc_info=True)
        return _json_response({"status": "error", "message": "Internal server error"}, 500)


@bp.route(route="report", methods=["GET"], auth_level=func.AuthLevel.FUNCTION)
def mailbox_report(req: func.HttpRequest) -> func.HttpResponse:
    """Build a usage report for one mailbox on demand.

    Requires a function key for authentication. The mailbox is passed in the
    ``mailbox`` query parameter. Unknown mailboxes return 404.
    """
    identity = (req.params.get("mailbox") or "").strip()
    if not identity:
        return _json_response(
            {"status": "error", "message": "Query parameter 'mailbox' is required"}, 400
        )

    logger.info("[mailbox_report] report requested; identity:%s", identity)

    try:
        config = load_config()
        report = report_builder_from_config(config).generate_report(identity)
        return _json_response({"status": "ok", "report": report.to_dict()}, 200)

    except MailboxLookupError as exc:
        logger.warning("[mailbox_report] mailbox not found; identity:%s", identity)
        return _json_response({"status": "error", "message": str(exc)}, 404)

    except Exception:
        logger.error("[mailbox_report] report generation failed", exc_info=True)
        return _json_response({"status": "error", "message": "Internal server error"}, 500)
