"""
Contract with the external decision-evaluation engine.

The engine (expression language, hit policies, requirement graphs) is not
part of this project. Any engine can be plugged in through a factory that
takes the post-decision-table listeners and returns an engine:

    def build_engine(listeners):
        engine = MyEngine()
        for listener in listeners:
            engine.on_decision_table_evaluated(listener)
        return engine

and is selected with DMN_SIM_ENGINE="my_package.my_module:build_engine".

Listeners are called synchronously, inside evaluate_decision, once per
decision table the engine executes.
"""

import importlib
import logging
from typing import Any, BinaryIO, Callable, Mapping, Optional, Protocol, Sequence

from simulator.errors import EngineUnavailableError

logger = logging.getLogger(__name__)


class MatchedRule(Protocol):
    """A rule the engine found to match; only its id is used."""

    id: Optional[str]


class DecisionTableEvaluationEvent(Protocol):
    """
    Passed to listeners after a decision table was evaluated.

    Engines may additionally expose `decision_id` (the decision whose table
    was evaluated); it is read with getattr and is optional.
    """

    matching_rules: Optional[Sequence[MatchedRule]]


class DecisionResult(Protocol):
    """
    Engine result. Engines expose a list of row mappings and/or a single entry;
    either accessor may raise when the shape does not apply to the hit policy.
    """

    @property
    def result_list(self) -> Optional[list[Mapping[str, Any]]]: ...

    @property
    def single_entry(self) -> Any: ...


DecisionTableListener = Callable[[DecisionTableEvaluationEvent], None]


class DecisionEngine(Protocol):
    def evaluate_decision(
        self,
        decision_id: str,
        document: BinaryIO,
        variables: Mapping[str, Any],
    ) -> DecisionResult: ...


EngineFactory = Callable[[Sequence[DecisionTableListener]], DecisionEngine]


def load_engine_factory(path: Optional[str]) -> EngineFactory:
    """
    Import an engine factory from "package.module:attribute".

    Raises EngineUnavailableError when no path is configured or it cannot be imported.
    """
    if not path:
        raise EngineUnavailableError(
            "No evaluation engine configured",
            "set DMN_SIM_ENGINE to 'package.module:factory'",
        )
    module_name, sep, attr_name = path.partition(":")
    if not sep or not module_name or not attr_name:
        raise EngineUnavailableError("Invalid engine path", f"expected 'package.module:factory', got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise EngineUnavailableError("Evaluation engine could not be imported", str(e)) from e
    factory = getattr(module, attr_name, None)
    if not callable(factory):
        raise EngineUnavailableError("Evaluation engine factory not found", f"{module_name} has no callable {attr_name!r}")
    logger.debug("Loaded evaluation engine factory %s", path)
    return factory
