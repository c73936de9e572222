"""
Map matched rule ids reported by the engine to 1-based table rows.

The engine's parsed model is opaque, so the document is parsed again here and
the target decision's rules are enumerated in document order. A missing
decision or table degrades to [] with a warning instead of failing the
request: the caller already has the evaluation payload.
"""

import logging
from typing import Iterable, Union

from simulator.errors import MalformedDocumentError
from simulator.services.dmn_xml import attr, descendants, load_document
from simulator.services.parser_service import decision_table, find_decision
from simulator.utils.logging import log_reconciliation_degraded

logger = logging.getLogger(__name__)


def map_rule_ids_to_indexes(
    dmn_xml: Union[str, bytes],
    decision_id: str,
    matched_rule_ids: Iterable[str],
) -> list[int]:
    """Positions (ascending, document order) of the rules whose id was matched."""
    matched = [rule_id for rule_id in matched_rule_ids or () if rule_id]
    if not matched:
        return []
    matched_set = set(matched)

    try:
        root = load_document(dmn_xml)
    except MalformedDocumentError as e:
        log_reconciliation_degraded(logger, decision_id, f"document not parsable: {e}", matched)
        return []

    decision_el = find_decision(root, decision_id)
    if decision_el is None:
        log_reconciliation_degraded(logger, decision_id, "decision not found", matched)
        return []
    table = decision_table(decision_el)
    if table is None:
        log_reconciliation_degraded(logger, decision_id, "decision has no decisionTable", matched)
        return []

    return [
        position
        for position, rule_el in enumerate(descendants(table, "rule"), start=1)
        if attr(rule_el, "id") in matched_set
    ]
