from __future__ import annotations

__all__ = ["IDs", "filter_control_id"]


class IDs:
    class Store:
        SESSION = "browser-session"

    class Control:
        CATALOG_SELECT = "catalog-select"
        ADD_FILTER_SELECT = "add-filter-select"
        FILTER_ROWS = "filter-rows"

        SAMPLE_RATIO = "sample-ratio"
        SAMPLE_SEED = "sample-seed"

        RESULT_TABLE = "result-table"
        RESULT_INFO = "result-info"
        STATUS_ALERT = "status-alert"

        HIST_CONTAINER = "hist-container"
        HIST_GRAPH = "hist-graph"
        HIST_LOG_X = "hist-log-x"
        HIST_LOG_Y = "hist-log-y"

        DOWNLOAD_LINKS = "download-links"
        CODE_SNIPPET = "code-snippet"

    class Pattern:
        # pattern-matching "type" strings, keyed by field name
        FILTER_SELECT = "filter-select"
        FILTER_LB = "filter-lb"
        FILTER_UB = "filter-ub"
        FILTER_REMOVE = "filter-remove"
        FILTER_HIST = "filter-hist"
        FILTER_RESET = "filter-reset"


def filter_control_id(kind: str, field_name: str) -> dict:
    return {"type": kind, "field": field_name}
