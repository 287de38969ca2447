"""Analytics reply decoder — tabular JSON → :class:`VideoStats`.

The analytics endpoint answers with column headers and row arrays::

    {
      "metadata": {"column_headers": {
          "dimensions": [{"field": "media_id"}],
          "metrics": [{"field": "plays"}, {"field": "complete_rate"}]
      }},
      "data": {"rows": [["media123", 10, 0.5]]}
    }

Each row is the media id followed by one cell per metric header, in
header order.  Only the first row is consulted.

Guarantees
----------
* Pure: no I/O, input is the raw body text.
* Unknown metric names are skipped, never an error.
* A metric whose cell is missing from a short row stays ``None``.
* Every structural problem raises :class:`InvalidResponseError`
  carrying the raw body.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from jwp_wrap.core.models import AnalyticsMetric, VideoStats
from jwp_wrap.exceptions import InvalidResponseError

logger = logging.getLogger(__name__)


def decode_video_stats(raw_body: str, media_id: str) -> VideoStats:
    """Shape an analytics reply into a :class:`VideoStats`.

    Parameters
    ----------
    raw_body:
        Response text as returned by the transport.
    media_id:
        The media id the query was filtered on.  The first cell of the
        first row must echo it.

    Raises
    ------
    InvalidResponseError
        If the body is not JSON, lacks ``metadata.column_headers.metrics``,
        or the first row belongs to another media id.
    """
    tree = _load(raw_body)
    metrics = _column_metrics(tree, raw_body)

    rows = _rows(tree)
    if not rows:
        return VideoStats()

    row = rows[0]
    if not isinstance(row, list) or not row or row[0] != media_id:
        raise InvalidResponseError(
            f"Unexpected analytics rows response: {raw_body}",
            raw_body=raw_body,
        )
    cells = row[1:]

    values: dict[str, Any] = {}
    for index, header in enumerate(metrics):
        field = header.get("field") if isinstance(header, dict) else None
        metric = AnalyticsMetric.from_field(field)
        if metric is None:
            logger.debug("Ignoring unknown analytics metric %r", field)
            continue
        if index >= len(cells):
            logger.debug("Analytics row has no cell for metric %r", field)
            continue
        values[metric.attribute] = cells[index]

    return VideoStats(**values)


# ---------------------------------------------------------------------------
# Tree access helpers
# ---------------------------------------------------------------------------

def _load(raw_body: str) -> Any:
    try:
        return json.loads(raw_body)
    except json.JSONDecodeError as exc:
        raise InvalidResponseError(
            f"Unexpected analytics metrics response: {raw_body}",
            raw_body=raw_body,
        ) from exc


def _column_metrics(tree: Any, raw_body: str) -> list[Any]:
    """Return ``metadata.column_headers.metrics`` or raise."""
    node: Any = tree
    for key in ("metadata", "column_headers", "metrics"):
        if not isinstance(node, dict) or node.get(key) is None:
            raise InvalidResponseError(
                f"Unexpected analytics metrics response: {raw_body}",
                raw_body=raw_body,
            )
        node = node[key]
    if not isinstance(node, list):
        raise InvalidResponseError(
            f"Unexpected analytics metrics response: {raw_body}",
            raw_body=raw_body,
        )
    return node


def _rows(tree: dict[str, Any]) -> list[Any]:
    data = tree.get("data")
    if not isinstance(data, dict):
        return []
    rows = data.get("rows")
    return rows if isinstance(rows, list) else []
