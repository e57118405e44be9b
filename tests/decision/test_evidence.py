"""Unit tests for rule-based claim validation."""

import pytest
from decision_engine.decision import evidence
from decision_engine.decision.evidence import ClaimEvidence


def make_claim(n_supporting, n_contradicting):
    return ClaimEvidence(
        claim="Competitor X raised prices in Q3",
        supporting=[f"source-{i}" for i in range(n_supporting)],
        contradicting=[f"counter-{i}" for i in range(n_contradicting)],
    )


class TestValidateClaim:
    """Tests for validate_claim verdict rules."""

    def test_supported(self):
        """Test all-supporting evidence."""
        result = evidence.validate_claim(make_claim(2, 0))
        assert result.verdict == 'supported'
        assert result.confidence == 1
        assert result.reasoning == "2 supporting vs 0 contradicting sources"

    def test_contradicted(self):
        """Test mostly contradicting evidence."""
        result = evidence.validate_claim(make_claim(1, 3))
        assert result.verdict == 'contradicted'
        assert result.confidence == 0.25

    def test_no_evidence(self):
        """Test no evidence is insufficient with zero confidence."""
        result = evidence.validate_claim(make_claim(0, 0))
        assert result.verdict == 'insufficient'
        assert result.confidence == 0
        assert result.reasoning == "No evidence provided"

    def test_mixed(self):
        """Test balanced evidence is mixed."""
        result = evidence.validate_claim(make_claim(2, 2))
        assert result.verdict == 'mixed'
        assert result.confidence == 0.5

    @pytest.mark.parametrize("n_sup,n_con,expected", [
        (7, 3, 'mixed'),          # exactly 0.7 is not above the threshold
        (3, 7, 'mixed'),          # exactly 0.3 is not below the threshold
        (8, 2, 'supported'),
        (2, 8, 'contradicted'),
        (1, 0, 'supported'),
        (0, 1, 'contradicted'),
    ])
    def test_threshold_boundaries(self, n_sup, n_con, expected):
        """Test strict inequalities at the band edges."""
        assert evidence.validate_claim(make_claim(n_sup, n_con)).verdict == expected

    def test_confidence_in_unit_interval(self):
        """Test confidence is a fraction of supporting evidence."""
        for n_sup in range(5):
            for n_con in range(5):
                result = evidence.validate_claim(make_claim(n_sup, n_con))
                assert 0 <= result.confidence <= 1

    def test_claim_carried_through(self):
        """Test claim text and serialisation."""
        result = evidence.validate_claim(make_claim(1, 1))
        payload = result.to_dict()
        assert payload['claim'] == "Competitor X raised prices in Q3"
        assert payload['verdict'] == 'mixed'
        assert set(payload) == {'claim', 'confidence', 'verdict', 'reasoning'}

    def test_idempotent(self):
        """Test identical input gives identical verdicts."""
        claim = make_claim(3, 1)
        assert evidence.validate_claim(claim) == evidence.validate_claim(claim)
