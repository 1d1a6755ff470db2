import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from openai import OpenAIError

from talenthub.core.enums import RiskLevel, TaskCategory
from talenthub.core.exceptions import AIDisabledError, DependencyUnavailableError
from talenthub.schemas.injury import AthleteRiskData
from talenthub.schemas.user import SkillMetrics
from talenthub.services.ai import AIClient, analyze_injury_risk_or_fallback


def completion(content: str) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture()
def sdk():
    with patch("talenthub.services.ai.OpenAI") as openai_cls:
        yield openai_cls


def make_client(sdk: MagicMock) -> AIClient:
    return AIClient(api_key="sk-test", model="gpt-4o-mini", timeout=3.0)


def generate(client: AIClient):
    return client.generate_task_recommendations(
        sport="Football", metrics=SkillMetrics(speed=3.0), skill_level="beginner", history=[]
    )


def test_client_is_bounded_and_never_retries(sdk):
    client = make_client(sdk)
    assert client.enabled
    sdk.assert_called_once_with(api_key="sk-test", timeout=3.0, max_retries=0)


def test_recommendations_are_parsed(sdk):
    client = make_client(sdk)
    sdk.return_value.chat.completions.create.return_value = completion(
        json.dumps(
            {
                "recommendations": [
                    {
                        "title": "Acceleration drills",
                        "description": "10 x 20m starts",
                        "difficulty": "hard",
                        "category": "training",
                        "points": 30,
                        "estimatedDuration": "25 minutes",
                    }
                ]
            }
        )
    )

    recommendations = generate(client)

    assert len(recommendations) == 1
    assert recommendations[0].category == TaskCategory.TRAINING
    assert recommendations[0].estimated_duration == "25 minutes"
    kwargs = sdk.return_value.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["response_format"] == {"type": "json_object"}


def test_one_invalid_recommendation_rejects_all(sdk):
    client = make_client(sdk)
    sdk.return_value.chat.completions.create.return_value = completion(
        json.dumps(
            {
                "recommendations": [
                    {"title": "Good", "description": "ok", "category": "training", "points": 20},
                    {"title": "Bad", "description": "no points", "category": "training", "points": 0},
                ]
            }
        )
    )
    with pytest.raises(DependencyUnavailableError):
        generate(client)


def test_json_is_extracted_from_surrounding_text(sdk):
    client = make_client(sdk)
    sdk.return_value.chat.completions.create.return_value = completion(
        'Here you go: {"recommendations": []} Good luck!'
    )
    assert generate(client) == []


def test_sdk_errors_become_dependency_unavailable(sdk):
    client = make_client(sdk)
    sdk.return_value.chat.completions.create.side_effect = OpenAIError("timed out")
    with pytest.raises(DependencyUnavailableError):
        generate(client)


def test_disabled_client_raises_not_enabled():
    client = AIClient(api_key=None, model="gpt-4o-mini", timeout=3.0)
    assert not client.enabled
    with pytest.raises(AIDisabledError) as excinfo:
        generate(client)
    assert excinfo.value.status_code == 501
    with pytest.raises(AIDisabledError):
        analyze_injury_risk_or_fallback(client, AthleteRiskData(sport="Football"))


def test_injury_analysis_is_parsed(sdk):
    client = make_client(sdk)
    sdk.return_value.chat.completions.create.return_value = completion(
        json.dumps(
            {
                "riskLevel": "medium",
                "bodyParts": ["knee"],
                "recommendations": ["Ice after sessions"],
                "confidence": 0.72,
            }
        )
    )
    analysis = client.analyze_injury_risk(AthleteRiskData(sport="Football", age=21))
    assert analysis.risk_level == RiskLevel.MEDIUM
    assert analysis.body_parts == ["knee"]
    assert analysis.confidence == 0.72


def test_injury_analysis_falls_back_on_garbage(sdk):
    client = make_client(sdk)
    sdk.return_value.chat.completions.create.return_value = completion("not json at all")
    analysis = analyze_injury_risk_or_fallback(client, AthleteRiskData(sport="Football"))
    assert analysis.risk_level == RiskLevel.LOW
    assert analysis.confidence == 0.5
    assert analysis.recommendations == ["Regular rest and recovery", "Proper warm-up and cool-down"]
