"""Tests for the hotel reservation workflow definition and loader."""

import json

import pytest

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hotel_ivr.workflows.hotel_reservation import WORKFLOW_DEF
from hotel_ivr.workflows.loader import load_workflow_jsonl
from hotel_ivr.workflows.schema import DialogueStage, Intent


class TestWorkflowDefinition:
    def test_initial_stage(self):
        assert WORKFLOW_DEF.initial_stage == DialogueStage.GREETING

    def test_every_stage_has_endpoint(self):
        assert WORKFLOW_DEF.endpoints == {
            DialogueStage.GREETING: "/answer",
            DialogueStage.INQUIRY: "/handle-inquiry",
            DialogueStage.ROOM_TYPE: "/handle-room-type",
            DialogueStage.BOOKING_MATCH: "/handle-booking",
            DialogueStage.CONFIRMATION: "/confirm-booking",
        }

    @pytest.mark.parametrize("stage, intent, expected", [
        (DialogueStage.GREETING, Intent.WELCOME, DialogueStage.INQUIRY),
        (DialogueStage.INQUIRY, Intent.AVAILABILITY, DialogueStage.ROOM_TYPE),
        (DialogueStage.INQUIRY, Intent.PRICES, DialogueStage.BOOKING_MATCH),
        (DialogueStage.INQUIRY, Intent.BOOK, DialogueStage.BOOKING_MATCH),
        (DialogueStage.INQUIRY, Intent.UNRECOGNIZED, DialogueStage.INQUIRY),
        (DialogueStage.ROOM_TYPE, Intent.UNRECOGNIZED, DialogueStage.INQUIRY),
        (DialogueStage.BOOKING_MATCH, Intent.MATCHED, DialogueStage.CONFIRMATION),
        (DialogueStage.BOOKING_MATCH, Intent.NO_MATCH, DialogueStage.BOOKING_MATCH),
        (DialogueStage.CONFIRMATION, Intent.DECLINED, DialogueStage.INQUIRY),
    ])
    def test_transitions(self, stage, intent, expected):
        assert WORKFLOW_DEF.next_stage(stage, intent) == expected

    @pytest.mark.parametrize("stage, intent", [
        (DialogueStage.INQUIRY, Intent.FAILED),
        (DialogueStage.ROOM_TYPE, Intent.FAILED),
        (DialogueStage.BOOKING_MATCH, Intent.FAILED),
        (DialogueStage.CONFIRMATION, Intent.CONFIRMED),
    ])
    def test_terminal_transitions(self, stage, intent):
        assert WORKFLOW_DEF.next_stage(stage, intent) is None

    def test_undefined_transition(self):
        with pytest.raises(ValueError, match="no transition"):
            WORKFLOW_DEF.next_stage(DialogueStage.CONFIRMATION, Intent.MATCHED)


class TestLoader:
    def test_skips_blank_lines(self, tmp_path):
        path = tmp_path / "wf.jsonl"
        path.write_text("\n\n" + json.dumps({
            "id": "tiny",
            "endpoints": {"greeting": "/answer"},
            "transitions": {"greeting": {"welcome": None}},
        }) + "\n")
        wf = load_workflow_jsonl(path)
        assert wf.id == "tiny"
        assert wf.next_stage(DialogueStage.GREETING, Intent.WELCOME) is None

    def test_empty_file(self, tmp_path):
        path = tmp_path / "wf.jsonl"
        path.write_text("\n")
        with pytest.raises(ValueError, match="No workflow"):
            load_workflow_jsonl(path)

    def test_target_without_endpoint(self, tmp_path):
        path = tmp_path / "wf.jsonl"
        path.write_text(json.dumps({
            "id": "broken",
            "endpoints": {"greeting": "/answer"},
            "transitions": {"greeting": {"welcome": "inquiry"}},
        }))
        with pytest.raises(ValueError, match="has no endpoint"):
            load_workflow_jsonl(path)
