"""
Preferences models - the advisor questionnaire and resolved preference set.
"""
import math
from typing import Annotated, Literal, Mapping, Optional, Sequence, Union, get_args

from pydantic import BaseModel, ConfigDict, Field

# Selecting one of these clears every other choice for the question
SENTINEL_VALUES = frozenset({"any", "none"})

DEFAULT_MAX_PICK = 3
MAX_OPTION_VALUES = 18

AnswerValue = Union[str, list[str]]


class QuestionOption(BaseModel):
    label: str
    value: str


class SingleChoiceQuestion(BaseModel):
    """Question answered with exactly one option."""
    kind: Literal["single"] = "single"
    id: str
    title: str
    description: Optional[str] = None
    options: list[QuestionOption] = Field(default_factory=list)

    def is_answered(self, answer: Optional[AnswerValue]) -> bool:
        return isinstance(answer, str) and len(answer) > 0


class MultiChoiceQuestion(BaseModel):
    """Question answered with up to max_pick options."""
    kind: Literal["multi"] = "multi"
    id: str
    title: str
    description: Optional[str] = None
    options: list[QuestionOption] = Field(default_factory=list)
    max_pick: int = DEFAULT_MAX_PICK

    def is_answered(self, answer: Optional[AnswerValue]) -> bool:
        return isinstance(answer, list) and len(answer) > 0


Question = Annotated[
    Union[SingleChoiceQuestion, MultiChoiceQuestion],
    Field(discriminator="kind"),
]


def _options(*pairs: tuple[str, str]) -> list[QuestionOption]:
    return [QuestionOption(label=label, value=value) for label, value in pairs]


def build_questions(
    brands: Sequence[str] = (),
    colors: Sequence[str] = (),
) -> list[Question]:
    """
    Build the advisor questionnaire.

    Brand and colour options come from the loaded catalog; only the first
    MAX_OPTION_VALUES sorted unique values are offered.
    """
    brand_values = sorted({b for b in brands if b})[:MAX_OPTION_VALUES]
    color_values = sorted({c for c in colors if c})[:MAX_OPTION_VALUES]

    return [
        SingleChoiceQuestion(
            id="goal",
            title="What do you want this car mainly for?",
            options=_options(
                ("Daily commute (reliable + low km)", "commute"),
                ("Family use (newer + roomy)", "family"),
                ("Budget deal (cheapest options)", "budget"),
                ("Resale / value (best value for money)", "value"),
                ("Project / rebuild (damage is OK)", "project"),
            ),
        ),
        SingleChoiceQuestion(
            id="budget",
            title="What's your maximum budget?",
            description="We'll prioritize cars with a Buy It Now price when available.",
            options=_options(
                ("Up to $2,000", "2000"),
                ("Up to $5,000", "5000"),
                ("Up to $10,000", "10000"),
                ("Up to $15,000", "15000"),
                ("Up to $25,000", "25000"),
                ("No hard limit", "nolimit"),
            ),
        ),
        SingleChoiceQuestion(
            id="year_pref",
            title="Do you prefer newer or older cars?",
            options=_options(
                ("Newer (2018+)", "newer"),
                ("Mid (2012-2017)", "mid"),
                ("Older (2000-2011)", "older"),
                ("Any", "any"),
            ),
        ),
        SingleChoiceQuestion(
            id="mileage",
            title="How much mileage are you comfortable with?",
            options=_options(
                ("Low (under 96k km)", "low"),
                ("Medium (96k-193k km)", "medium"),
                ("High (193k+ is okay)", "high"),
                ("Any / don't care", "any"),
            ),
        ),
        SingleChoiceQuestion(
            id="damage_tolerance",
            title="How much damage are you okay with?",
            description="Auction cars may have damage listed (e.g. front end, hail).",
            options=_options(
                ("Minimal / light damage only", "low"),
                ("Moderate is okay", "medium"),
                ("Any damage is okay (project car)", "high"),
            ),
        ),
        SingleChoiceQuestion(
            id="buy_now",
            title="Do you want to focus on Buy It Now listings?",
            options=_options(
                ("Yes (prefer Buy It Now)", "yes"),
                ("No (auction is fine)", "no"),
            ),
        ),
        MultiChoiceQuestion(
            id="brand_pick",
            title="Pick up to 3 preferred brands",
            description="Optional. Skip if you want best match regardless of brand.",
            options=_options(("No preference", "any"), *((b, b) for b in brand_values)),
        ),
        SingleChoiceQuestion(
            id="color_pick",
            title="Preferred color?",
            description="Optional. Some listings don't have a color.",
            options=_options(("Any", "any"), *((c, c) for c in color_values)),
        ),
        SingleChoiceQuestion(
            id="min_photos",
            title="Do you want listings with more photos?",
            options=_options(("Yes (more photos)", "yes"), ("No preference", "no")),
        ),
        SingleChoiceQuestion(
            id="location_pref",
            title="Do you want to prioritize a specific location?",
            description="Optional. We'll match text in the location field.",
            options=_options(
                ("No preference", "any"),
                ("Near me (enter manually on next screen)", "manual"),
            ),
        ),
        SingleChoiceQuestion(
            id="repair_budget",
            title="How much do you want to spend on repairs?",
            options=_options(
                ("Very little", "low"),
                ("Some repairs are ok", "medium"),
                ("Big rebuild is ok", "high"),
            ),
        ),
        SingleChoiceQuestion(
            id="value_focus",
            title="What matters more?",
            options=_options(
                ("Cheapest price", "cheap"),
                ("Newer year", "newer"),
                ("Lower km", "miles"),
                ("Higher retail value (potential upside)", "retail"),
            ),
        ),
        MultiChoiceQuestion(
            id="avoid_damage",
            title="Anything you want to avoid?",
            description="We'll de-prioritize these damage keywords when possible.",
            options=_options(
                ("No preference", "none"),
                ("Front End", "FRONT"),
                ("Rear End", "REAR"),
                ("Hail", "HAIL"),
                ("Water / Flood", "WATER"),
                ("Burn", "BURN"),
            ),
        ),
        SingleChoiceQuestion(
            id="explain",
            title="Do you want a short explanation for the match?",
            options=_options(("Yes", "yes"), ("No", "no")),
        ),
        SingleChoiceQuestion(
            id="ready",
            title="Ready to get your AI matches?",
            options=_options(("Yes, show me cars", "yes")),
        ),
    ]


QUESTIONS = build_questions()


def toggle_multi(
    current: Optional[Sequence[str]],
    value: str,
    max_pick: int = DEFAULT_MAX_PICK,
) -> list[str]:
    """
    Toggle a multi-select value.

    A sentinel ("any"/"none") replaces the whole selection. Concrete values
    toggle in and out, drop any sentinel, and the result is cut to max_pick.
    """
    if value in SENTINEL_VALUES:
        return [value]

    cleaned = [v for v in (current or []) if v not in SENTINEL_VALUES]
    if value in cleaned:
        selected = [v for v in cleaned if v != value]
    else:
        selected = cleaned + [value]
    return selected[:max_pick]


Goal = Literal["commute", "family", "budget", "value", "project"]
YearPref = Literal["newer", "mid", "older", "any"]
MileagePref = Literal["low", "medium", "high", "any"]
Level = Literal["low", "medium", "high"]
YesNo = Literal["yes", "no"]
ValueFocus = Literal["cheap", "newer", "miles", "retail"]


class PreferenceSet(BaseModel):
    """
    Fully populated advisor preferences.

    Every dimension carries a default, so scoring never branches on a
    missing answer.
    """
    model_config = ConfigDict(frozen=True)

    goal: Goal = "value"
    budget_max: Optional[float] = Field(default=None, description="None means no limit")
    year_pref: YearPref = "any"
    mileage: MileagePref = "any"
    damage_tolerance: Level = "medium"
    buy_now: YesNo = "no"
    brands: tuple[str, ...] = ()
    color: str = "any"
    min_photos: YesNo = "no"
    location_text: str = Field(default="", description="Lower-cased manual location")
    repair_budget: Level = "medium"
    value_focus: ValueFocus = "cheap"
    avoid_damage: tuple[str, ...] = ()
    explain: YesNo = "yes"

    @property
    def wants_buy_now(self) -> bool:
        return self.buy_now == "yes"

    @property
    def wants_photos(self) -> bool:
        return self.min_photos == "yes"

    @property
    def wants_explanations(self) -> bool:
        return self.explain == "yes"


_SINGLE_CHOICE_FIELDS = {
    "goal": "goal",
    "year_pref": "year_pref",
    "mileage": "mileage",
    "damage_tolerance": "damage_tolerance",
    "buy_now": "buy_now",
    "min_photos": "min_photos",
    "repair_budget": "repair_budget",
    "value_focus": "value_focus",
    "explain": "explain",
}


def _allowed_values(field_name: str) -> tuple[str, ...]:
    annotation = PreferenceSet.model_fields[field_name].annotation
    return get_args(annotation)


def _parse_budget(raw: Optional[AnswerValue]) -> Optional[float]:
    if not isinstance(raw, str) or raw == "nolimit":
        return None
    try:
        budget = float(raw)
    except ValueError:
        return None
    # Zero, negative and non-finite budgets behave like no budget
    if not math.isfinite(budget) or budget <= 0:
        return None
    return budget


def _multi(raw: Optional[AnswerValue]) -> tuple[str, ...]:
    if not isinstance(raw, (list, tuple)):
        return ()
    return tuple(v for v in raw if isinstance(v, str) and v not in SENTINEL_VALUES)


def resolve_preferences(
    answers: Mapping[str, AnswerValue],
    manual_location: str = "",
) -> PreferenceSet:
    """
    Materialize a PreferenceSet from raw questionnaire answers.

    Missing questions and unrecognised values fall back to defaults, unknown
    question ids are ignored. The manual location is only used when the
    location question was answered with "manual".
    """
    values: dict = {}

    for question_id, field_name in _SINGLE_CHOICE_FIELDS.items():
        raw = answers.get(question_id)
        if isinstance(raw, str) and raw in _allowed_values(field_name):
            values[field_name] = raw

    values["budget_max"] = _parse_budget(answers.get("budget"))
    values["brands"] = _multi(answers.get("brand_pick"))
    values["avoid_damage"] = tuple(k.upper() for k in _multi(answers.get("avoid_damage")))

    color = answers.get("color_pick")
    if isinstance(color, str) and color:
        values["color"] = color

    if answers.get("location_pref") == "manual":
        values["location_text"] = manual_location.strip().lower()

    return PreferenceSet(**values)
