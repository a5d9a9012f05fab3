"""CSV export of survey responses."""

from __future__ import annotations

import csv
import io
from typing import Iterable

from surveybot.models.domain import ResponseEntity, SurveyEntity

CSV_HEADER = ("survey", "slug", "timestamp", "rating")


def render_csv(survey: SurveyEntity, responses: Iterable[ResponseEntity]) -> str:
    """Render responses as CSV text.

    Fields containing a comma, quote or line break are quoted with
    internal quotes doubled; everything else is written bare.

    Args:
        survey: Survey the responses belong to.
        responses: Responses to export, in output order.

    Returns:
        CSV document with a header row, rows joined by "\\n" and no
        trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for response in responses:
        writer.writerow([survey.name, survey.slug, response.created_at, response.rating])
    return buffer.getvalue().removesuffix("\n")


def export_filename(survey: SurveyEntity) -> str:
    """Download filename for a survey's export."""
    return f"{survey.slug}-responses.csv"
