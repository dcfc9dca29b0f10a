"""Static-analyzer output consumed by the resource pipeline.

These mirror the JSON the analyzer front-end sends (camelCase keys). Every
field has a default so partially-populated contexts still validate; extra
keys are ignored, and an explicit null is treated like a missing key.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null from upstream means "not reported", so the field default applies
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# --- Code context ---


class LanguageInfo(CamelModel):
    language: str = "unknown"
    dialect: Optional[str] = None
    confidence: float = 0.0


class LibraryInfo(CamelModel):
    name: str = ""
    is_standard_lib: bool = False
    category: str = "unknown"
    import_path: Optional[str] = None


class FrameworkInfo(CamelModel):
    name: str = ""
    confidence: float = 0.0
    indicators: list[str] = Field(default_factory=list)


class ErrorHandlingStrategy(CamelModel):
    approach: str = "unknown"  # exceptions, result-types, panic, silent, mixed, unknown
    has_error_handling: bool = False


class LibraryAnalysis(CamelModel):
    libraries: list[LibraryInfo] = Field(default_factory=list)
    frameworks: list[FrameworkInfo] = Field(default_factory=list)
    error_handling: Optional[ErrorHandlingStrategy] = None

    @model_validator(mode="after")
    def _drop_unnamed(self) -> "LibraryAnalysis":
        # An entry without a name cannot become a search target
        self.libraries = [lib for lib in self.libraries if lib.name.strip()]
        self.frameworks = [fw for fw in self.frameworks if fw.name.strip()]
        return self

    @property
    def external_libraries(self) -> list[LibraryInfo]:
        return [lib for lib in self.libraries if not lib.is_standard_lib]


class ParadigmScore(CamelModel):
    paradigm: str = "procedural"
    score: float = 0.0


class ExecutionModelInfo(CamelModel):
    primary: str = "synchronous"


class ParadigmAnalysis(CamelModel):
    primary: ParadigmScore = Field(default_factory=ParadigmScore)
    execution_model: ExecutionModelInfo = Field(default_factory=ExecutionModelInfo)


# --- Review IR ---


class StructureMetrics(CamelModel):
    lines_of_code: int = 0
    functions: int = 0
    classes: int = 0
    loops: int = 0
    paradigm: str = ""


class DecisionRule(CamelModel):
    condition: str = ""
    outcome: str = ""
    location: Optional[Union[int, dict]] = None


class MagicValue(CamelModel):
    value: Union[str, float, int, bool, None] = None
    role: Optional[str] = None  # inferred semantic role, e.g. "timeout", "http-status"
    location: Optional[Union[int, dict]] = None


class SilentBehavior(CamelModel):
    type: str = ""  # pass, ignored-input, fallthrough, empty-catch
    risk: str = "low"
    location: Optional[Union[int, dict]] = None


class ReviewElements(CamelModel):
    decision_rules: list[DecisionRule] = Field(default_factory=list)
    magic_values: list[MagicValue] = Field(default_factory=list)
    silent_behaviors: list[SilentBehavior] = Field(default_factory=list)


class BehaviorFacts(CamelModel):
    execution_model: str = "synchronous"
    is_deterministic: bool = True
    side_effects: str = "none"
    external_interactions: list[str] = Field(default_factory=list)


class QualityFacts(CamelModel):
    testability: float = 0.0
    control_flow_complexity: float = 0.0
    error_handling: Optional[str] = None


class ReviewIR(CamelModel):
    language: str = ""
    code_type: str = ""
    structure: StructureMetrics = Field(default_factory=StructureMetrics)
    behavior: BehaviorFacts = Field(default_factory=BehaviorFacts)
    quality: QualityFacts = Field(default_factory=QualityFacts)
    elements: ReviewElements = Field(default_factory=ReviewElements)


class CodeContext(CamelModel):
    language: LanguageInfo = Field(default_factory=LanguageInfo)
    libraries: LibraryAnalysis = Field(default_factory=LibraryAnalysis)
    paradigm: ParadigmAnalysis = Field(default_factory=ParadigmAnalysis)
    review_ir: ReviewIR = Field(default_factory=ReviewIR, alias="reviewIR")

    @property
    def language_name(self) -> str:
        return self.language.language or "unknown"

    @property
    def execution_model(self) -> str:
        """Execution model from the review IR, falling back to paradigm detection."""
        model = self.review_ir.behavior.execution_model
        if model and model != "synchronous":
            return model
        return self.paradigm.execution_model.primary or model

    @property
    def error_handling(self) -> Optional[str]:
        if self.review_ir.quality.error_handling:
            return self.review_ir.quality.error_handling
        if self.libraries.error_handling is not None:
            return self.libraries.error_handling.approach
        return None
