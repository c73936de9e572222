"""
Structural parser: DMN document -> decision-table view model.

Walks the document by local tag name only and rebuilds, for every `decision`
element, its input/output columns and rules for UI rendering. Nothing is
evaluated here. Missing attributes degrade to '' or to the documented
fallbacks (decision name -> id, column label -> name); they never raise.

Assumption: the scan is namespace-blind, so a foreign element that happens to
be called `input`, `output` or `rule` inside a decision table would be picked
up as well. DMN's grammar does not allow such elements there.
"""

import logging
import time
import xml.etree.ElementTree as ET
from typing import Optional, Union

from shared.schemas import ParseResponse
from simulator.models.dmn import (
    AllowedValuesKind,
    Decision,
    InputDefinition,
    OutputDefinition,
    RuleDefinition,
)
from simulator.services.allowed_values import lex_allowed_values
from simulator.services.dmn_xml import (
    attr,
    child_text,
    descendants,
    first_child,
    load_document,
    local_name,
)
from simulator.utils.logging import log_parse

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Lookup helpers (shared with the reconciler)
# -----------------------------------------------------------------------------


def decision_elements(root: ET.Element) -> list[ET.Element]:
    """Every `decision` element in document order, the root included."""
    return [el for el in root.iter() if local_name(el.tag) == "decision"]


def find_decision(root: ET.Element, decision_id: str) -> Optional[ET.Element]:
    """First `decision` element (document order) whose id equals decision_id."""
    for el in decision_elements(root):
        if attr(el, "id") == decision_id:
            return el
    return None


def decision_table(decision_el: ET.Element) -> Optional[ET.Element]:
    """The decision's single decisionTable child, if it has one."""
    return first_child(decision_el, "decisionTable")


# -----------------------------------------------------------------------------
# Columns and rules
# -----------------------------------------------------------------------------


def _entry_texts(rule_el: ET.Element, entry_name: str) -> list[str]:
    entries = []
    for entry in descendants(rule_el, entry_name):
        entries.append(child_text(entry, "text") or "")
    return entries


def extract_inputs(table: ET.Element) -> list[InputDefinition]:
    inputs: list[InputDefinition] = []
    for input_el in descendants(table, "input"):
        label = attr(input_el, "label")
        name: Optional[str] = None
        type_ref: Optional[str] = None

        expression = first_child(input_el, "inputExpression")
        if expression is not None:
            type_ref = attr(expression, "typeRef") or None
            name = child_text(expression, "text")

        allowed_values: list[str] = []
        allowed_text: Optional[str] = None
        allowed_kind = AllowedValuesKind.NONE
        input_values = first_child(input_el, "inputValues")
        if input_values is not None:
            allowed_text = child_text(input_values, "text")
            if allowed_text:
                lexed = lex_allowed_values(allowed_text)
                allowed_values = list(lexed.values)
                allowed_kind = lexed.kind

        inputs.append(
            InputDefinition(
                id=attr(input_el, "id"),
                label=label or name,
                name=name,
                type_ref=type_ref,
                allowed_values=allowed_values,
                allowed_values_text=allowed_text or None,
                allowed_values_kind=allowed_kind,
            )
        )
    return inputs


def extract_outputs(table: ET.Element) -> list[OutputDefinition]:
    outputs: list[OutputDefinition] = []
    for output_el in descendants(table, "output"):
        name = attr(output_el, "name")
        outputs.append(
            OutputDefinition(
                id=attr(output_el, "id"),
                name=name,
                label=attr(output_el, "label") or name,
                type_ref=attr(output_el, "typeRef") or None,
            )
        )
    return outputs


def extract_rules(table: ET.Element) -> list[RuleDefinition]:
    return [
        RuleDefinition(
            id=attr(rule_el, "id"),
            index=position,
            input_entries=_entry_texts(rule_el, "inputEntry"),
            output_entries=_entry_texts(rule_el, "outputEntry"),
        )
        for position, rule_el in enumerate(descendants(table, "rule"), start=1)
    ]


def build_decision(decision_el: ET.Element) -> Decision:
    decision_id = attr(decision_el, "id")
    table = decision_table(decision_el)
    if table is None:
        return Decision(id=decision_id, name=attr(decision_el, "name") or decision_id)
    return Decision(
        id=decision_id,
        name=attr(decision_el, "name") or decision_id,
        inputs=extract_inputs(table),
        outputs=extract_outputs(table),
        rules=extract_rules(table),
    )


# -----------------------------------------------------------------------------
# Entry points
# -----------------------------------------------------------------------------


def parse_decisions(dmn_xml: Union[str, bytes]) -> list[Decision]:
    """
    Parse every decision in the document, in document order.

    Raises MalformedDocumentError when the text is not well-formed XML.
    """
    start = time.perf_counter()
    root = load_document(dmn_xml)
    decisions = [build_decision(el) for el in decision_elements(root)]
    log_parse(
        logger,
        decision_count=len(decisions),
        rule_count=sum(len(d.rules) for d in decisions),
        duration_sec=round(time.perf_counter() - start, 4),
    )
    return decisions


def parse_document(dmn_xml: Union[str, bytes]) -> ParseResponse:
    """Parse wrapped in the REST response shape."""
    return ParseResponse(decisions=parse_decisions(dmn_xml))
