"""
Pytest fixtures for DMN simulator tests.

The evaluation engine is external to this project; tests plug in the
FakeEngine from tests/fake_engine.py through the EvaluationService dependency.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fake_engine import build_engine
from simulator.auth import reset_rate_limits
from simulator.main import app
from simulator.services import monitoring_service
from simulator.services.evaluation_service import EvaluationService, get_evaluation_service

SAMPLES_DIR = Path(__file__).resolve().parent.parent / "samples"

# One decision, two rules: <18 -> "minor", >=18 -> "adult"
AGE_DMN = """<?xml version="1.0" encoding="UTF-8"?>
<definitions xmlns="https://www.omg.org/spec/DMN/20191111/MODEL/" id="defs" name="Ages" namespace="http://example.com">
  <decision id="d1" name="Age check">
    <decisionTable id="dt1" hitPolicy="UNIQUE">
      <input id="i1" label="Age">
        <inputExpression id="ie1" typeRef="number"><text>age</text></inputExpression>
      </input>
      <output id="o1" name="category" typeRef="string" />
      <rule id="r1">
        <inputEntry id="r1i1"><text>&lt;18</text></inputEntry>
        <outputEntry id="r1o1"><text>"minor"</text></outputEntry>
      </rule>
      <rule id="r2">
        <inputEntry id="r2i1"><text>&gt;=18</text></inputEntry>
        <outputEntry id="r2o1"><text>"adult"</text></outputEntry>
      </rule>
    </decisionTable>
  </decision>
</definitions>
"""

# DMN 1.1 namespace with a prefix, three rules, a COLLECT table, a table with
# no matching rule for most inputs and a decision without a table.
MULTI_DMN = """<?xml version="1.0" encoding="UTF-8"?>
<dmn:definitions xmlns:dmn="http://www.omg.org/spec/DMN/20151101/dmn.xsd" id="defs2" name="Multi" namespace="http://example.com">
  <dmn:decision id="dish" name="Dish">
    <dmn:decisionTable id="dt_dish" hitPolicy="COLLECT">
      <dmn:input id="season" label="Season">
        <dmn:inputExpression id="ie_season" typeRef="string"><dmn:text>season</dmn:text></dmn:inputExpression>
        <dmn:inputValues id="iv_season"><dmn:text>"Winter","Summer","Spring"</dmn:text></dmn:inputValues>
      </dmn:input>
      <dmn:input id="guests">
        <dmn:inputExpression id="ie_guests" typeRef="integer"><dmn:text> guestCount </dmn:text></dmn:inputExpression>
        <dmn:inputValues id="iv_guests"><dmn:text>[1..20]</dmn:text></dmn:inputValues>
      </dmn:input>
      <dmn:output id="out_dish" name="dish" label="Dish" typeRef="string" />
      <dmn:output id="out_note" name="note" />
      <dmn:rule id="rule_a">
        <dmn:inputEntry id="a1"><dmn:text>"Winter"</dmn:text></dmn:inputEntry>
        <dmn:inputEntry id="a2"><dmn:text>-</dmn:text></dmn:inputEntry>
        <dmn:outputEntry id="a3"><dmn:text>"Roastbeef"</dmn:text></dmn:outputEntry>
        <dmn:outputEntry id="a4"><dmn:text>"hearty"</dmn:text></dmn:outputEntry>
      </dmn:rule>
      <dmn:rule id="rule_b">
        <dmn:inputEntry id="b1"><dmn:text>"Summer"</dmn:text></dmn:inputEntry>
        <dmn:inputEntry id="b2"><dmn:text>&lt;=8</dmn:text></dmn:inputEntry>
        <dmn:outputEntry id="b3"><dmn:text>"Salad"</dmn:text></dmn:outputEntry>
        <dmn:outputEntry id="b4"><dmn:text/></dmn:outputEntry>
      </dmn:rule>
      <dmn:rule id="rule_c">
        <dmn:inputEntry id="c1"><dmn:text>-</dmn:text></dmn:inputEntry>
        <dmn:inputEntry id="c2"><dmn:text>&gt;8</dmn:text></dmn:inputEntry>
        <dmn:outputEntry id="c3"><dmn:text>"Stew"</dmn:text></dmn:outputEntry>
        <dmn:outputEntry id="c4"><dmn:text>"big pot"</dmn:text></dmn:outputEntry>
      </dmn:rule>
    </dmn:decisionTable>
  </dmn:decision>
  <dmn:decision id="greeting">
    <dmn:literalExpression id="le"><dmn:text>"hi"</dmn:text></dmn:literalExpression>
  </dmn:decision>
</dmn:definitions>
"""

# "beverage" requires "dish"; both are decision tables.
CHAIN_DMN = """<?xml version="1.0" encoding="UTF-8"?>
<definitions xmlns="https://www.omg.org/spec/DMN/20191111/MODEL/" id="defs3" name="Chain" namespace="http://example.com">
  <decision id="dish" name="Dish">
    <decisionTable id="dt_dish" hitPolicy="FIRST">
      <input id="i_season"><inputExpression id="ie_season" typeRef="string"><text>season</text></inputExpression></input>
      <output id="o_dish" name="dish" />
      <rule id="dish_1">
        <inputEntry id="d1i"><text>"Winter"</text></inputEntry>
        <outputEntry id="d1o"><text>"Stew"</text></outputEntry>
      </rule>
      <rule id="dish_2">
        <inputEntry id="d2i"><text>-</text></inputEntry>
        <outputEntry id="d2o"><text>"Salad"</text></outputEntry>
      </rule>
    </decisionTable>
  </decision>
  <decision id="beverage" name="Beverage">
    <informationRequirement id="req1"><requiredDecision href="#dish" /></informationRequirement>
    <decisionTable id="dt_bev" hitPolicy="FIRST">
      <input id="i_guests"><inputExpression id="ie_guests" typeRef="number"><text>guests</text></inputExpression></input>
      <output id="o_bev" name="beverage" />
      <rule id="bev_1">
        <inputEntry id="b1i"><text>&gt;10</text></inputEntry>
        <outputEntry id="b1o"><text>"Punch"</text></outputEntry>
      </rule>
      <rule id="bev_2">
        <inputEntry id="b2i"><text>-</text></inputEntry>
        <outputEntry id="b2o"><text>"Water"</text></outputEntry>
      </rule>
    </decisionTable>
  </decision>
</definitions>
"""


@pytest.fixture
def age_dmn() -> str:
    return AGE_DMN


@pytest.fixture
def multi_dmn() -> str:
    return MULTI_DMN


@pytest.fixture
def chain_dmn() -> str:
    return CHAIN_DMN


@pytest.fixture
def sample_dmn() -> str:
    return (SAMPLES_DIR / "age_classification.dmn").read_text(encoding="utf-8")


@pytest.fixture
def service() -> EvaluationService:
    return EvaluationService(build_engine)


@pytest.fixture
def client(service):
    """FastAPI TestClient evaluating with the fake engine."""
    app.dependency_overrides[get_evaluation_service] = lambda: service
    reset_rate_limits()
    monitoring_service.reset_metrics()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
