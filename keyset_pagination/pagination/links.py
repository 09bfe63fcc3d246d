"""RFC 8288 Link headers for cursor pagination."""

from typing import Any, Dict, Optional
from urllib.parse import urlencode

from ..models import Cursor


def create_link_header(
    base_url: str,
    params: Dict[str, Any],
    next_cursor: Cursor
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Current query parameters; cursor parameters are replaced
        next_cursor: Cursors returned by the paginator

    Returns:
        Link header value or None if no links
    """
    base_params = {
        k: v for k, v in params.items()
        if k not in ("after", "before") and v is not None
    }
    links = []

    if next_cursor.after:
        next_url = f"{base_url}?" + urlencode({**base_params, "after": next_cursor.after})
        links.append(f'<{next_url}>; rel="next"')

    if next_cursor.before:
        prev_url = f"{base_url}?" + urlencode({**base_params, "before": next_cursor.before})
        links.append(f'<{prev_url}>; rel="prev"')

    return ", ".join(links) if links else None
