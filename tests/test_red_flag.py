"""
Tests for the red-flag decision table.

Covered scenarios:
  A) instantaneous + severity 5   → urgent
  B) instantaneous + severity 2   → advisory
  C) gradual + severity 5         → none (no aura combination)
  D) aura + visual disturbance    → advisory regardless of speed
  E) resolved / acknowledged      → none
  F) acknowledgement is per episode, never global
  G) the evaluator never mutates the episode
"""
import pytest

from aurae.schemas.episode import RetrospectiveDetail
from aurae.schemas.report import RedFlagAssessmentOut
from aurae.schemas.vocabulary import OnsetSpeed, RedFlagReason, Urgency
from aurae.services.red_flag import active_red_flags, evaluate_red_flag


def _aura_retro() -> RetrospectiveDetail:
    return RetrospectiveDetail(symptoms=["aura", "visual_disturbance", "nausea"])


class TestDecisionTable:
    def test_instantaneous_severe_is_urgent(self, make_episode):
        a = evaluate_red_flag(make_episode(severity=5, onset_speed=OnsetSpeed.instantaneous))
        assert a.urgency == Urgency.urgent
        assert a.reason == RedFlagReason.sudden_onset
        assert a.should_surface

    def test_instantaneous_at_four_is_urgent(self, make_episode):
        a = evaluate_red_flag(make_episode(severity=4, onset_speed="instantaneous"))
        assert a.urgency == Urgency.urgent

    def test_instantaneous_mild_is_advisory(self, make_episode):
        a = evaluate_red_flag(make_episode(severity=2, onset_speed=OnsetSpeed.instantaneous))
        assert a.urgency == Urgency.advisory
        assert a.reason == RedFlagReason.sudden_onset

    def test_gradual_severe_is_none(self, make_episode):
        a = evaluate_red_flag(make_episode(severity=5, onset_speed=OnsetSpeed.gradual))
        assert a.urgency == Urgency.none
        assert a.reason is None
        assert not a.should_surface

    @pytest.mark.parametrize("speed", [OnsetSpeed.moderate, OnsetSpeed.unknown])
    def test_other_speeds_are_none(self, make_episode, speed):
        assert evaluate_red_flag(make_episode(severity=5, onset_speed=speed)).urgency == Urgency.none

    def test_aura_combination_is_advisory(self, make_episode):
        a = evaluate_red_flag(make_episode(
            severity=5, onset_speed=OnsetSpeed.gradual, retrospective=_aura_retro(),
        ))
        assert a.urgency == Urgency.advisory
        assert a.reason == RedFlagReason.aura_with_visual_disturbance
        assert a.matched_symptoms == ("Aura", "Visual disturbance")

    def test_aura_with_unknown_speed(self, make_episode):
        a = evaluate_red_flag(make_episode(severity=1, retrospective=_aura_retro()))
        assert a.urgency == Urgency.advisory

    def test_aura_alone_is_none(self, make_episode):
        retro = RetrospectiveDetail(symptoms=["aura", "nausea"])
        assert evaluate_red_flag(make_episode(retrospective=retro)).urgency == Urgency.none

    def test_sudden_onset_with_aura_stays_urgent(self, make_episode):
        a = evaluate_red_flag(make_episode(
            severity=5, onset_speed=OnsetSpeed.instantaneous, retrospective=_aura_retro(),
        ))
        assert a.urgency == Urgency.urgent
        assert a.matched_symptoms == ("Aura", "Visual disturbance")


class TestSuppression:
    def test_resolved_episode_never_surfaces(self, make_episode):
        e = make_episode(severity=5, onset_speed=OnsetSpeed.instantaneous, duration_hours=1)
        assert evaluate_red_flag(e).urgency == Urgency.none

    def test_acknowledged_episode_never_surfaces(self, make_episode):
        e = make_episode(severity=5, onset_speed=OnsetSpeed.instantaneous)
        e.acknowledge_red_flag()
        assert evaluate_red_flag(e).urgency == Urgency.none

    def test_acknowledgement_is_per_episode(self, make_episode):
        first = make_episode(days_ago=2, severity=5, onset_speed=OnsetSpeed.instantaneous)
        first.acknowledge_red_flag()
        second = make_episode(severity=5, onset_speed=OnsetSpeed.instantaneous)
        assert evaluate_red_flag(first).urgency == Urgency.none
        assert evaluate_red_flag(second).urgency == Urgency.urgent


class TestStateless:
    def test_does_not_mutate_episode(self, make_episode):
        e = make_episode(severity=5, onset_speed=OnsetSpeed.instantaneous, retrospective=_aura_retro())
        before = e.model_dump()
        evaluate_red_flag(e)
        evaluate_red_flag(e)
        assert e.model_dump() == before
        assert e.has_acknowledged_red_flag is False

    def test_repeated_calls_agree(self, make_episode):
        e = make_episode(severity=2, onset_speed=OnsetSpeed.instantaneous)
        assert evaluate_red_flag(e) == evaluate_red_flag(e)


class TestActiveRedFlags:
    def test_filters_and_keeps_order(self, make_episode):
        urgent = make_episode(severity=5, onset_speed=OnsetSpeed.instantaneous)
        quiet = make_episode(severity=5, onset_speed=OnsetSpeed.gradual)
        advisory = make_episode(retrospective=_aura_retro())
        flagged = active_red_flags([urgent, quiet, advisory])
        assert [a.episode_id for a in flagged] == [urgent.id, advisory.id]

    def test_serialises(self, make_episode):
        e = make_episode(severity=5, onset_speed=OnsetSpeed.instantaneous)
        out = RedFlagAssessmentOut.model_validate(evaluate_red_flag(e))
        assert out.urgency == Urgency.urgent
        assert out.should_surface is True
        assert out.episode_id == e.id
