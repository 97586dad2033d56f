"""
github_actions_validator.py

Structural checks for GitHub Actions workflow YAML.

Runs on YAML that already passed the syntax check. Works on the composed
node tree rather than loaded data so that keys keep their source line and
`on:` stays a string (YAML 1.1 loaders read a bare `on` as boolean True).
"""

import re
from typing import AsyncIterator, Dict, Iterator, List, Optional, Tuple

import yaml

from core import github_actions as gha
from core.models import ValidationResult, ValidationSeverity
from .validation_pipeline import AsyncValidationPipeline

Entry = Tuple[yaml.Node, yaml.Node]

NULL_TAG = "tag:yaml.org,2002:null"

_SECRET_PATTERNS = [re.compile(p) for p in gha.SECURITY_PATTERNS]


def _line(node: Optional[yaml.Node]) -> int:
    if node is None or node.start_mark is None:
        return 0
    return node.start_mark.line + 1


def _result(
    severity: ValidationSeverity, message: str, node: Optional[yaml.Node] = None
) -> ValidationResult:
    return ValidationResult("Structure", severity, message, _line(node), "")


def _mapping(node: yaml.MappingNode) -> Dict[str, Entry]:
    """Map scalar key text to (key node, value node)."""
    entries: Dict[str, Entry] = {}
    for key_node, value_node in node.value:
        if isinstance(key_node, yaml.ScalarNode):
            entries[str(key_node.value)] = (key_node, value_node)
    return entries


def _scalars(node: yaml.Node) -> List[Tuple[str, yaml.Node]]:
    """Scalar values of a scalar or sequence node."""
    if isinstance(node, yaml.ScalarNode):
        return [(str(node.value), node)]
    if isinstance(node, yaml.SequenceNode):
        return [
            (str(item.value), item)
            for item in node.value
            if isinstance(item, yaml.ScalarNode)
        ]
    return []


def _is_expression(value: str) -> bool:
    return "${{" in value


class GitHubActionsValidator(AsyncValidationPipeline[str]):
    """Checks workflow structure: top-level keys, triggers, jobs and steps."""

    _instance: Optional["GitHubActionsValidator"] = None

    @classmethod
    def instance(cls) -> "GitHubActionsValidator":
        if cls.__dict__.get("_instance") is None:
            cls._instance = cls()
        return cls._instance

    def validate_workflow_content(self, yaml_content: str) -> AsyncIterator[ValidationResult]:
        return self.validate(yaml_content)

    async def _validations(self, yaml_content: str) -> AsyncIterator[Optional[ValidationResult]]:
        try:
            root = next(iter(yaml.compose_all(yaml_content, Loader=yaml.SafeLoader)), None)
        except yaml.YAMLError:
            # Syntax problems are reported by YamlValidator
            return

        if root is None:
            return

        if not isinstance(root, yaml.MappingNode):
            yield _result(
                ValidationSeverity.ERROR,
                "Workflow must be a mapping of top-level keys",
                root,
            )
            return

        top = _mapping(root)
        for check in (self._check_top_level, self._check_triggers, self._check_jobs):
            for result in check(top):
                yield result

    # ==========================================================================
    # Top level
    # ==========================================================================
    def _check_top_level(self, top: Dict[str, Entry]) -> Iterator[ValidationResult]:
        if "on" not in top:
            yield _result(ValidationSeverity.ERROR, "Missing required top-level key 'on'")
        if "name" not in top:
            yield _result(ValidationSeverity.WARNING, "Missing top-level key 'name'")

        known = gha.REQUIRED_TOP_LEVEL | gha.OPTIONAL_TOP_LEVEL
        for key, (key_node, _) in top.items():
            if key not in known:
                yield _result(
                    ValidationSeverity.WARNING, f"Unknown top-level key '{key}'", key_node
                )

    # ==========================================================================
    # Triggers
    # ==========================================================================
    def _check_triggers(self, top: Dict[str, Entry]) -> Iterator[ValidationResult]:
        if "on" not in top:
            return
        _, on_node = top["on"]

        if isinstance(on_node, yaml.MappingNode):
            events = [(key, key_node) for key, (key_node, _) in _mapping(on_node).items()]
        else:
            # `on:` and `on: null` compose to a null scalar
            events = [
                (event, node)
                for event, node in _scalars(on_node)
                if event.strip() and node.tag != NULL_TAG
            ]

        if not events:
            yield _result(ValidationSeverity.ERROR, "No trigger events defined under 'on'", on_node)
            return

        for event, node in events:
            if event not in gha.TRIGGER_EVENTS:
                yield _result(
                    ValidationSeverity.WARNING, f"Unknown trigger event '{event}'", node
                )

    # ==========================================================================
    # Jobs
    # ==========================================================================
    def _check_jobs(self, top: Dict[str, Entry]) -> Iterator[ValidationResult]:
        if "jobs" not in top:
            yield _result(ValidationSeverity.WARNING, "Workflow defines no jobs")
            return

        _, jobs_node = top["jobs"]
        if not isinstance(jobs_node, yaml.MappingNode):
            yield _result(ValidationSeverity.ERROR, "'jobs' must be a mapping", jobs_node)
            return

        jobs = _mapping(jobs_node)
        for job_id, (key_node, job_node) in jobs.items():
            if not isinstance(job_node, yaml.MappingNode):
                yield _result(
                    ValidationSeverity.ERROR, f"Job '{job_id}' must be a mapping", key_node
                )
                continue
            yield from self._check_job(job_id, key_node, _mapping(job_node), set(jobs))

    def _check_job(
        self,
        job_id: str,
        job_key: yaml.Node,
        job: Dict[str, Entry],
        job_ids: set,
    ) -> Iterator[ValidationResult]:
        for prop, (prop_node, _) in job.items():
            if prop not in gha.JOB_PROPERTIES:
                yield _result(
                    ValidationSeverity.WARNING,
                    f"Unknown property '{prop}' in job '{job_id}'",
                    prop_node,
                )

        reusable = "uses" in job
        if "runs-on" not in job and not reusable:
            yield _result(
                ValidationSeverity.ERROR, f"Job '{job_id}' is missing 'runs-on'", job_key
            )
        elif "runs-on" in job:
            for label, node in _scalars(job["runs-on"][1]):
                if label not in gha.RUNNER_LABELS and not _is_expression(label):
                    yield _result(
                        ValidationSeverity.INFO,
                        f"Unrecognized runner label '{label}' in job '{job_id}'",
                        node,
                    )

        if "needs" in job:
            for needed, node in _scalars(job["needs"][1]):
                if needed not in job_ids:
                    yield _result(
                        ValidationSeverity.ERROR,
                        f"Job '{job_id}' needs undefined job '{needed}'",
                        node,
                    )

        if reusable:
            return

        if "steps" not in job:
            yield _result(ValidationSeverity.ERROR, f"Job '{job_id}' has no steps", job_key)
            return

        steps_node = job["steps"][1]
        if not isinstance(steps_node, yaml.SequenceNode):
            yield _result(
                ValidationSeverity.ERROR, f"'steps' in job '{job_id}' must be a list", steps_node
            )
            return

        for index, step_node in enumerate(steps_node.value, start=1):
            yield from self._check_step(job_id, index, step_node)

    # ==========================================================================
    # Steps
    # ==========================================================================
    def _check_step(
        self, job_id: str, index: int, step_node: yaml.Node
    ) -> Iterator[ValidationResult]:
        label = f"Step {index} in job '{job_id}'"
        where = f"step {index} in job '{job_id}'"
        if not isinstance(step_node, yaml.MappingNode):
            yield _result(ValidationSeverity.ERROR, f"{label} must be a mapping", step_node)
            return

        step = _mapping(step_node)
        has_run, has_uses = "run" in step, "uses" in step
        if has_run and has_uses:
            yield _result(
                ValidationSeverity.ERROR, f"{label} cannot define both 'run' and 'uses'", step_node
            )
        elif not has_run and not has_uses:
            yield _result(
                ValidationSeverity.ERROR, f"{label} must define 'run' or 'uses'", step_node
            )

        for prop, (prop_node, _) in step.items():
            if prop not in gha.STEP_PROPERTIES:
                yield _result(
                    ValidationSeverity.WARNING, f"Unknown property '{prop}' in {where}", prop_node
                )

        if "shell" in step:
            shell_node = step["shell"][1]
            shell = str(getattr(shell_node, "value", ""))
            # Custom shells use a "{0}" placeholder for the script path
            if shell not in gha.SHELLS and "{0}" not in shell:
                yield _result(
                    ValidationSeverity.WARNING, f"Unknown shell '{shell}' in {where}", shell_node
                )

        if has_run:
            run_node = step["run"][1]
            script = str(getattr(run_node, "value", ""))
            if any(pattern.search(script) for pattern in _SECRET_PATTERNS):
                yield _result(
                    ValidationSeverity.INFO,
                    f"{label} references secrets directly in 'run'; prefer passing them through 'env'",
                    run_node,
                )


def validate_workflow_content(yaml_content: str) -> AsyncIterator[ValidationResult]:
    return GitHubActionsValidator.instance().validate_workflow_content(yaml_content)
