"""
AI collaborator adapter.

Wraps the OpenAI chat completions API for two jobs: generating daily task
recommendations and estimating injury risk. The generator is an unreliable
dependency: every call is bounded by ``settings.ai_timeout_seconds`` with no
SDK retries, and every failure surfaces as ``DependencyUnavailableError`` so
callers can take their fallback path. ``AIDisabledError`` means no API key
is configured.
"""
import json
import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from openai import OpenAI, OpenAIError
from pydantic import ValidationError as PydanticValidationError

from ..core.config import get_settings
from ..core.enums import RiskLevel, TaskCategory, TaskDifficulty
from ..core.exceptions import AIDisabledError, DependencyUnavailableError
from ..schemas.ai import Recommendation
from ..schemas.injury import AthleteRiskData, InjuryRiskAnalysis
from ..schemas.user import SkillMetrics

logger = logging.getLogger(__name__)

FALLBACK_RECOMMENDATIONS: tuple[Recommendation, ...] = (
    Recommendation(
        title="Complete 30-minute practice session",
        description="Focus on fundamental skills and techniques",
        difficulty=TaskDifficulty.MEDIUM,
        category=TaskCategory.TRAINING,
        points=20,
        estimated_duration="30 minutes",
    ),
    Recommendation(
        title="Log your nutrition intake",
        description="Track meals and hydration for better performance",
        difficulty=TaskDifficulty.EASY,
        category=TaskCategory.NUTRITION,
        points=10,
        estimated_duration="10 minutes",
    ),
)

FALLBACK_INJURY_ANALYSIS = InjuryRiskAnalysis(
    risk_level=RiskLevel.LOW,
    body_parts=[],
    recommendations=["Regular rest and recovery", "Proper warm-up and cool-down"],
    confidence=0.5,
)

RECOMMENDATION_COUNT = 5


def _extract_json_object(text: str) -> Dict[str, Any]:
    if not text:
        raise ValueError("Empty model response")
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end <= start:
            raise ValueError("No JSON object found in model response")
        parsed = json.loads(text[start : end + 1])
    if not isinstance(parsed, dict):
        raise ValueError("Model response JSON is not an object")
    return parsed


class AIClient:
    def __init__(self, api_key: Optional[str], model: str, timeout: float):
        self.model = model
        self.timeout = timeout
        self._client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0) if api_key else None

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def _complete_json(self, system: str, prompt: str, max_tokens: int) -> Dict[str, Any]:
        if self._client is None:
            raise AIDisabledError()
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                max_tokens=max_tokens,
            )
            content = response.choices[0].message.content or ""
            return _extract_json_object(content)
        except (OpenAIError, ValueError) as exc:
            logger.error("AI request failed: %s", exc)
            raise DependencyUnavailableError("AI request failed.") from exc

    def generate_task_recommendations(
        self,
        sport: str,
        metrics: SkillMetrics,
        skill_level: str,
        history: list[dict[str, Any]],
    ) -> list[Recommendation]:
        """All-or-nothing: one malformed recommendation rejects the whole response."""
        prompt = f"""Generate {RECOMMENDATION_COUNT} personalized training recommendations for an athlete.

Sport: {sport}
Current metrics (out of 10): speed {metrics.speed}, strength {metrics.strength}, stamina {metrics.stamina}, technique {metrics.technique}
Skill level: {skill_level}
Recent performance: {json.dumps(history, default=str)}

Target their weakest areas while maintaining their strengths. Return a JSON object
{{"recommendations": [{{"title": str, "description": str, "difficulty": "easy"|"medium"|"hard",
"category": "training"|"nutrition"|"recovery"|"analysis", "points": 10-50, "estimatedDuration": str}}]}}"""
        data = self._complete_json(
            system="You are an expert AI sports coach. Always respond with valid JSON.",
            prompt=prompt,
            max_tokens=1500,
        )
        raw = data.get("recommendations")
        if not isinstance(raw, list):
            raise DependencyUnavailableError("AI response has no recommendations.")
        try:
            return [Recommendation.model_validate(item) for item in raw]
        except PydanticValidationError as exc:
            logger.error("AI returned an invalid recommendation: %s", exc)
            raise DependencyUnavailableError("AI returned invalid recommendations.") from exc

    def analyze_injury_risk(self, athlete_data: AthleteRiskData) -> InjuryRiskAnalysis:
        prompt = f"""Analyze injury risk for this athlete:

Age: {athlete_data.age}
Sport: {athlete_data.sport}
Recent metrics: {json.dumps(athlete_data.recent_metrics, default=str)}
Training load: {athlete_data.training_load}
Previous injuries: {", ".join(athlete_data.previous_injuries) or "None"}

Respond with JSON: {{"riskLevel": "low"|"medium"|"high"|"critical", "bodyParts": [...], "recommendations": [...], "confidence": 0.xx}}"""
        data = self._complete_json(
            system="You are an AI sports medicine expert specializing in injury prevention.",
            prompt=prompt,
            max_tokens=800,
        )
        try:
            return InjuryRiskAnalysis(
                risk_level=data.get("riskLevel") or RiskLevel.LOW,
                body_parts=data.get("bodyParts") or [],
                recommendations=data.get("recommendations") or [],
                confidence=data.get("confidence") or 0.5,
            )
        except PydanticValidationError as exc:
            logger.error("AI returned an invalid injury analysis: %s", exc)
            raise DependencyUnavailableError("AI returned an invalid injury analysis.") from exc


def analyze_injury_risk_or_fallback(client: AIClient, athlete_data: AthleteRiskData) -> InjuryRiskAnalysis:
    """Raises only when AI is disabled; request failures degrade to the fallback analysis."""
    if not client.enabled:
        raise AIDisabledError()
    try:
        return client.analyze_injury_risk(athlete_data)
    except DependencyUnavailableError:
        logger.warning("Injury analysis unavailable, returning fallback analysis")
        return FALLBACK_INJURY_ANALYSIS.model_copy(deep=True)


@lru_cache
def _build_client(api_key: Optional[str], model: str, timeout: float) -> AIClient:
    return AIClient(api_key=api_key, model=model, timeout=timeout)


def get_ai_client() -> AIClient:
    settings = get_settings()
    api_key = settings.openai_api_key if settings.ai_enabled else None
    return _build_client(api_key, settings.openai_model, settings.ai_timeout_seconds)
