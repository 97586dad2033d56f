# ==============================================================================
# GITHUB ACTIONS VOCABULARY
# ==============================================================================

REQUIRED_TOP_LEVEL = frozenset({"name", "on"})

OPTIONAL_TOP_LEVEL = frozenset(
    {"env", "defaults", "concurrency", "jobs", "permissions", "run-name"}
)

JOB_PROPERTIES = frozenset(
    {
        "runs-on", "steps", "needs", "if", "name", "permissions", "environment",
        "concurrency", "outputs", "env", "defaults", "timeout-minutes", "strategy",
        "continue-on-error", "container", "services",
        # reusable workflow calls
        "uses", "with", "secrets",
    }
)

STEP_PROPERTIES = frozenset(
    {
        "name", "id", "if", "run", "uses", "with", "env", "continue-on-error",
        "timeout-minutes", "shell", "working-directory",
    }
)

TRIGGER_EVENTS = frozenset(
    {
        "push", "pull_request", "pull_request_target", "workflow_dispatch", "workflow_call",
        "workflow_run", "schedule", "repository_dispatch", "release", "issues",
        "issue_comment", "watch", "fork", "create", "delete", "deployment",
        "deployment_status", "page_build", "public", "status", "gollum", "member",
        "membership", "project", "project_card", "project_column", "milestone", "label",
        "discussion", "discussion_comment", "check_run", "check_suite", "merge_group",
        "pull_request_review", "pull_request_review_comment", "registry_package",
    }
)

RUNNER_LABELS = frozenset(
    {
        "ubuntu-latest", "ubuntu-24.04", "ubuntu-22.04", "ubuntu-20.04", "ubuntu-18.04",
        "windows-latest", "windows-2022", "windows-2019",
        "macos-latest", "macos-14", "macos-13", "macos-12", "macos-11",
        "self-hosted",
    }
)

SHELLS = frozenset({"bash", "pwsh", "powershell", "cmd", "sh", "python"})

SECURITY_PATTERNS = (r"secrets\.", r"\$\{\{\s*secrets\.")

