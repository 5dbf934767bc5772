from wifistudy.eval.metrics import reduce_metrics, summarize_scenario
from wifistudy.eval.sink import CSV_HEADER, ResultSink, append_row, ensure_header

__all__ = [
    "CSV_HEADER",
    "ResultSink",
    "append_row",
    "ensure_header",
    "reduce_metrics",
    "summarize_scenario",
]
