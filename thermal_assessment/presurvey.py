"""Pre-survey scoring: decides which thermal measurements an investigation needs."""

from dataclasses import dataclass

from .models import Presurvey, PresurveyResult, SurveyAnswer, SurveyRecommendation


@dataclass(frozen=True)
class SurveyQuestion:
    id: str
    group: str
    text: str
    weight: int
    scenario: str  # "heat", "cold", "comfort" or "general"


PRESURVEY_QUESTIONS: tuple[SurveyQuestion, ...] = (
    # Heat
    SurveyQuestion("QC1", "Heat stress", "Is the air temperature at the workplace regularly above "
                   "28 °C (indoor work) or 30 °C (outdoor work)?", 3, "heat"),
    SurveyQuestion("QC2", "Heat stress", "Are radiant heat sources present (furnaces, melting "
                   "plants, solar load, hot machine surfaces)?", 3, "heat"),
    SurveyQuestion("QC3", "Heat stress", "Is the physical workload moderate to heavy (ISO 8996 "
                   "class 2 or higher, > 200 W/m²)?", 2, "heat"),
    SurveyQuestion("QC4", "Heat stress", "Is the relative humidity structurally high (> 60 %) "
                   "combined with high temperature?", 2, "heat"),
    SurveyQuestion("QC5", "Heat stress", "Is airtight or poorly vapour-permeable protective "
                   "clothing worn?", 2, "heat"),
    # Cold
    SurveyQuestion("QC6", "Cold stress", "Is the air temperature at the workplace regularly below "
                   "10 °C (cool work) or below 0 °C (cold work)?", 3, "cold"),
    SurveyQuestion("QC7", "Cold stress", "Is there outdoor work in cold seasons or work in cold "
                   "stores or freezers?", 3, "cold"),
    SurveyQuestion("QC8", "Cold stress", "Are there cold-related health complaints (frostbite, "
                   "symptoms of hypothermia)?", 2, "cold"),
    # Indoor comfort
    SurveyQuestion("QC9", "Indoor comfort", "Are there repeated complaints about a too warm or too "
                   "cold indoor climate without direct heat or cold stress?", 2, "comfort"),
    SurveyQuestion("QC10", "Indoor comfort", "Are there complaints about draught (cold air flow, "
                   "colder ankle or head zone) at the workplace?", 2, "comfort"),
    SurveyQuestion("QC11", "Indoor comfort", "Is the air temperature at the workplace structurally "
                   "outside the 20-26 °C range?", 2, "comfort"),
    SurveyQuestion("QC12", "Indoor comfort", "Is the relative humidity structurally below 30 % or "
                   "above 70 %?", 1, "comfort"),
    # General
    SurveyQuestion("QC13", "General", "Have there been incidents or near misses related to heat "
                   "or cold (heat exhaustion, frostbite)?", 3, "general"),
    SurveyQuestion("QC14", "General", "Is a risk inventory available that identifies the thermal "
                   "climate as a risk factor?", 1, "general"),
    SurveyQuestion("QC15", "General", "Are workers not, or only recently, acclimatized to extreme "
                   "temperature conditions?", 2, "general"),
)


def recommend(heat_score: float, cold_score: float,
              comfort_score: float) -> SurveyRecommendation:
    if max(heat_score, cold_score, comfort_score) == 0:
        return SurveyRecommendation.NOT_REQUIRED
    if heat_score >= 6 and cold_score >= 4:
        return SurveyRecommendation.FULL_INVESTIGATION
    if heat_score >= 6:
        return SurveyRecommendation.HEAT_MEASUREMENT
    if cold_score >= 6:
        return SurveyRecommendation.COLD_MEASUREMENT
    if comfort_score >= 4 or heat_score >= 3 or cold_score >= 3:
        return SurveyRecommendation.COMFORT_MEASUREMENT
    return SurveyRecommendation.NOT_REQUIRED


def score_presurvey(survey: Presurvey) -> PresurveyResult:
    """
    Score the pre-survey answers and derive a measurement recommendation.

    Every "yes" adds the question weight to its scenario score; general
    questions add half their weight to all three scores. The estimated
    temperature and reported complaints raise the scores further.

    Args:
        survey: The pre-survey answers

    Returns:
        PresurveyResult with the computed recommendation, the effective one
        (a manual override wins) and the signals behind the scores
    """
    heat = cold = comfort = 0.0
    signals: list[str] = []

    for question in PRESURVEY_QUESTIONS:
        if survey.responses.get(question.id) != SurveyAnswer.YES:
            continue
        if question.scenario == "heat":
            heat += question.weight
        elif question.scenario == "cold":
            cold += question.weight
        elif question.scenario == "comfort":
            comfort += question.weight
        else:
            heat += question.weight * 0.5
            cold += question.weight * 0.5
            comfort += question.weight * 0.5
        signals.append(question.text)

    if survey.estimated_temperature is not None:
        t = survey.estimated_temperature
        if t > 28:
            heat += 2
        if t < 10:
            cold += 2
        if t > 32:
            heat += 3
        if t < 0:
            cold += 3

    if survey.complaints_reported:
        heat += 1
        cold += 1
        comfort += 1
        if survey.complaints_description:
            signals.append(f"Complaints: {survey.complaints_description}")

    recommendation = recommend(heat, cold, comfort)
    return PresurveyResult(
        recommendation=recommendation,
        effective_recommendation=survey.recommendation_override or recommendation,
        heat_score=heat,
        cold_score=cold,
        comfort_score=comfort,
        signals=signals,
    )
