"""
Evidence-Based Claim Validation
===============================

Rule-based verdicts for competitive and brand claims, scored from the
balance of supporting versus contradicting evidence. Only the counts of
evidence items matter; their text is carried through untouched.

Verdict Rules (first match wins):
- **SUPPORTED**: confidence > 0.7
- **CONTRADICTED**: confidence < 0.3
- **INSUFFICIENT**: no evidence, or fewer than 2 items in the middle band
- **MIXED**: everything else

Example Usage:
--------------
>>> from decision_engine.decision import evidence
>>>
>>> verdict = evidence.validate_claim(evidence.ClaimEvidence(
...     claim="Our onboarding is faster than Competitor X",
...     supporting=["G2 review", "internal benchmark"],
...     contradicting=[],
... ))
>>> print(verdict.verdict)  # 'supported'
>>> print(verdict.reasoning)  # '2 supporting vs 0 contradicting sources'
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Literal, Sequence

Verdict = Literal["supported", "contradicted", "insufficient", "mixed"]

SUPPORTED_THRESHOLD = 0.7
CONTRADICTED_THRESHOLD = 0.3
MIN_EVIDENCE_FOR_MIXED = 2


@dataclass(frozen=True)
class ClaimEvidence:
    """Claim plus the evidence gathered for and against it."""
    claim: str
    supporting: Sequence[str] = field(default_factory=tuple)
    contradicting: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class ClaimVerdict:
    """Container for a claim validation outcome."""
    claim: str
    confidence: float
    verdict: Verdict
    reasoning: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def validate_claim(evidence: ClaimEvidence) -> ClaimVerdict:
    """
    Score a claim from its supporting and contradicting evidence.

    Parameters
    ----------
    evidence : ClaimEvidence
        The claim and its evidence items

    Returns
    -------
    ClaimVerdict
        confidence = supporting / total (0 when there is no evidence) and
        the verdict picked by the rules above

    Example
    -------
    >>> v = validate_claim(ClaimEvidence("claim", ["a"], ["b", "c", "d"]))
    >>> v.verdict, v.confidence
    ('contradicted', 0.25)
    """
    n_supporting = len(evidence.supporting)
    n_contradicting = len(evidence.contradicting)
    total = n_supporting + n_contradicting

    if total == 0:
        return ClaimVerdict(
            claim=evidence.claim,
            confidence=0.0,
            verdict="insufficient",
            reasoning="No evidence provided",
        )

    confidence = n_supporting / total

    if confidence > SUPPORTED_THRESHOLD:
        verdict = "supported"
    elif confidence < CONTRADICTED_THRESHOLD:
        verdict = "contradicted"
    elif total < MIN_EVIDENCE_FOR_MIXED:
        verdict = "insufficient"
    else:
        verdict = "mixed"

    return ClaimVerdict(
        claim=evidence.claim,
        confidence=confidence,
        verdict=verdict,
        reasoning=f"{n_supporting} supporting vs {n_contradicting} contradicting sources",
    )
