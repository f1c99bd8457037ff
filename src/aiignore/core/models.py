from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from aiignore.core.constants import REASON_NO_MATCH, REASON_RULE


class RuleReport(BaseModel):
    """Serializable description of the rule that decided a verdict."""
    model_config = ConfigDict(frozen=True)
    source_path: str
    line_number: int
    raw_text: str
    pattern: str = ""
    negated: bool = False
    directory_only: bool = False
    basename_only: bool = False
    anchored: bool = False

    def describe(self) -> str:
        return f"{self.source_path}:{self.line_number}: '{self.raw_text}'"


class Verdict(BaseModel):
    model_config = ConfigDict(frozen=True)
    path: str
    ignored: bool = False
    reason: str = REASON_NO_MATCH
    boundary_root: Optional[str] = None
    rule: Optional[RuleReport] = None

    @property
    def matched_rule(self) -> bool:
        return self.reason == REASON_RULE and self.rule is not None

    def to_result_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "ignored": self.ignored,
            "reason": self.reason,
            "boundary_root": self.boundary_root,
            "rule": self.rule.model_dump() if self.rule else None,
        }
