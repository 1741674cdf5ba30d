# Overview: Flask API routes for the dashboard, monthly report, and date-range search.

from flask import Blueprint, jsonify, request, g, current_app

from ..decorators import require_auth
from ..extensions import view_states
from ..responses import internal_error_response, remote_error_response
from ..services import reporting_service
from ..services.api_client import RemoteApiError
from ..time_utils import current_month_range
from ..validation import ValidationError, validate_date_range, validate_status_filter


reports_bp = Blueprint("reports", __name__, url_prefix="/api")


@reports_bp.get("/dashboard")
@require_auth
def dashboard_route():
    """Stock added, sold, returned, and remaining totals."""
    try:
        snapshot = view_states.refresh(
            (g.caller_key, "dashboard"),
            lambda: reporting_service.dashboard_stats(g.api),
        )
        return jsonify({**snapshot.data, "stale": snapshot.stale}), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to load dashboard")


@reports_bp.get("/reports/monthly")
@require_auth
def monthly_report_route():
    """
    Monthly report over every box.

    Query params:
    - category: folder id or "all" (default)
    """
    limit = current_app.config["REPORTS_PRODUCT_LIMIT"]
    try:
        snapshot = view_states.refresh(
            (g.caller_key, "reports"),
            lambda: reporting_service.fetch_report_data(g.api, limit=limit),
        )
        report = reporting_service.monthly_report(
            snapshot.data,
            category_filter=request.args.get("category"),
        )
        report["stale"] = snapshot.stale
        return jsonify(report), 200
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to build monthly report")


@reports_bp.get("/search")
@require_auth
def search_route():
    """
    Boxes and totals for a date range.

    Query params:
    - startDate, endDate: YYYY-MM-DD (default: current month)
    - category: folder id or "all"
    - status: all | inStock | sold | returned
    - q: str (optional) - match on box or folder name
    """
    default_start, default_end = current_month_range()
    try:
        start, end = validate_date_range(
            request.args.get("startDate", default_start),
            request.args.get("endDate", default_end),
        )
        status_filter = validate_status_filter(request.args.get("status"))
        snapshot = view_states.refresh(
            (g.caller_key, "search", start, end),
            lambda: reporting_service.fetch_search_data(g.api, start_date=start, end_date=end),
        )
        results = reporting_service.search_results(
            snapshot.data,
            category_filter=request.args.get("category"),
            status_filter=status_filter,
            query=request.args.get("q"),
        )
        results["stale"] = snapshot.stale
        return jsonify(results), 200
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RemoteApiError as e:
        return remote_error_response(e)
    except Exception:
        return internal_error_response("Failed to search boxes")
