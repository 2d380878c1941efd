"""
Statistics Aggregator Module
"""
import math
from typing import Dict, Iterable, List

from docportal.models.document import DocumentRecord
from docportal.schemas.document import DocumentStats


def aggregate(documents: Iterable[DocumentRecord]) -> DocumentStats:
    """
    Summarize a set of documents: total hours, resolved count and units per
    material. Documents without extracted data contribute nothing.

    fsum keeps the totals independent of iteration order.
    """
    hours: List[float] = []
    resolved = 0
    units: Dict[str, List[float]] = {}
    count = 0

    for doc in documents:
        count += 1
        data = doc.data
        if data is None:
            continue
        hours.append(data.hours)
        if data.is_resolved:
            resolved += 1
        for material in data.materials:
            units.setdefault(material.name, []).append(material.units)

    return DocumentStats(
        total_hours=math.fsum(hours),
        resolved_count=resolved,
        materials={name: math.fsum(values) for name, values in sorted(units.items())},
        document_count=count,
    )
