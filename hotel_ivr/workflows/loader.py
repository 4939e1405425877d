"""Load JSONL workflow definitions into DialogueWorkflowDef objects."""

from __future__ import annotations

import json
from pathlib import Path

from hotel_ivr.workflows.schema import DialogueWorkflowDef


def load_workflow_jsonl(path: str | Path) -> DialogueWorkflowDef:
    """Load a single workflow from a JSONL file.

    The JSONL file contains exactly one JSON object (the workflow).
    Every transition target must be a stage with a registered endpoint.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8").strip()

    # JSONL: one JSON object per line — take the first non-empty line
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        workflow = DialogueWorkflowDef(**json.loads(line))
        _check_targets(workflow)
        return workflow

    raise ValueError(f"No workflow found in {path}")


def _check_targets(workflow: DialogueWorkflowDef) -> None:
    """Reject transitions into stages the provider could never be sent to."""
    for stage, targets in workflow.transitions.items():
        for intent, target in targets.items():
            if target is not None and target not in workflow.endpoints:
                raise ValueError(
                    f"Workflow {workflow.id}: {stage.value} --{intent.value}--> "
                    f"{target.value} has no endpoint"
                )
