"""
Demo dispatcher.

Maps an operation id chosen in the web form to one of the demo scripts, runs
it as a child process and reports success (exit code 0) or failure. Form
values reach the script as command-line arguments; the parent process
environment is never modified.
"""

import os
import subprocess
import sys
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from mandrill_demo.data.templates import DEFAULT_TEMPLATE
from mandrill_demo.observability.logger import log_error, log_event, timing


PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PROJECT_ROOT = os.path.dirname(PACKAGE_DIR)


@dataclass(frozen=True)
class DemoOperation:
    module: str
    description: str


@dataclass
class DispatchResult:
    success: bool
    message: str
    operation: str
    output: str = ""
    exit_code: Optional[int] = None


OPERATIONS: Dict[str, DemoOperation] = {
    "single": DemoOperation(
        module="mandrill_demo.scripts.single_recipient",
        description=(
            "Send a single email to a single recipient. This script uses the Mailchimp Transactional API "
            "to send a simple email with a subject, from name, from email, to name, to email, and content. "
            "It is a good starting point for transactional mail such as a welcome or password reset email. "
            "For this demo all values come from configuration."
        ),
    ),
    "mergeTags": DemoOperation(
        module="mandrill_demo.scripts.merge_tags",
        description=(
            "Send an email with merge tags. Merge tags are placeholders in your email content that are "
            "replaced with dynamic data when the email is sent. Use them to personalise messages, such as "
            "a promotional email with the recipient's name and a discount code."
        ),
    ),
    "attachments": DemoOperation(
        module="mandrill_demo.scripts.attachments",
        description=(
            "Send an email with attachments. Files are attached as base64 encoded content, such as a "
            "monthly newsletter with a PDF. For simplicity, this demo uses a generated text file and an "
            "optional sample PDF."
        ),
    ),
    "templates": DemoOperation(
        module="mandrill_demo.scripts.template",
        description=(
            "Send an email with a template. Templates are reusable layouts stored in your account and "
            "populated with dynamic content at send time, giving branded mail a consistent look. The "
            "selected template is created from the built-in definitions if it does not exist yet."
        ),
    ),
    "allInOne": DemoOperation(
        module="mandrill_demo.scripts.kitchen_sink",
        description=(
            "Send an email with all the supported features: merge tags, attachments, tracking options, "
            "custom headers, tags and metadata in one message."
        ),
    ),
}

# Form field name -> script option for the operations that take parameters.
MERGE_TAG_FIELDS = {
    "firstName": "--first-name",
    "lastName": "--last-name",
    "companyName": "--company-name",
    "membershipLevel": "--membership-level",
}


def get_description(operation: Optional[str]) -> str:
    op = OPERATIONS.get(operation or "")
    return op.description if op else ""


def build_arguments(operation: str, params: Mapping[str, Optional[str]]) -> List[str]:
    """
    Translate form fields into the script's command-line options.

    Values are joined to their option with "=" so text starting with a dash
    is never read as another option.
    """
    args: List[str] = []
    if operation == "mergeTags":
        for field, option in MERGE_TAG_FIELDS.items():
            value = (params.get(field) or "").strip()
            if value:
                args.append(f"{option}={value}")
    elif operation == "templates":
        template_name = (params.get("template_name") or "").strip() or DEFAULT_TEMPLATE
        args.append(f"--template-name={template_name}")
    return args


class DemoDispatcher:
    def __init__(
        self,
        project_root: str = PROJECT_ROOT,
        python: str = sys.executable,
        timeout: Optional[float] = None,
    ):
        self.project_root = project_root
        self.python = python
        self.timeout = timeout

    def _script_path(self, module: str) -> str:
        return os.path.join(self.project_root, *module.split(".")) + ".py"

    def dispatch(self, operation: Optional[str], params: Optional[Mapping[str, Optional[str]]] = None) -> DispatchResult:
        op = OPERATIONS.get(operation or "")
        if op is None:
            return DispatchResult(success=False, message="Unknown script type", operation=operation or "")
        if not os.path.isfile(self._script_path(op.module)):
            return DispatchResult(
                success=False,
                message=f"Script not found: {op.module}",
                operation=operation,
            )
        command = [self.python, "-m", op.module, *build_arguments(operation, params or {})]
        return self._run(operation, command)

    def _run(self, operation: str, command: List[str]) -> DispatchResult:
        try:
            with timing(operation) as t:
                completed = subprocess.run(
                    command,
                    cwd=self.project_root,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    timeout=self.timeout,
                    check=False,
                )
        except (OSError, subprocess.SubprocessError) as exc:
            log_error(exc, {"operation": operation})
            return DispatchResult(success=False, message=f"Script failed: {exc}", operation=operation)

        output = completed.stdout or ""
        success = completed.returncode == 0
        log_event(
            "dispatched" if success else "failed",
            operation,
            None,
            0,
            duration_ms=t.duration_ms,
            exit_code=completed.returncode,
        )
        if success:
            message = f"Email sent successfully! Output: {output}"
        else:
            message = f"Script failed: {output}"
        return DispatchResult(
            success=success,
            message=message,
            operation=operation,
            output=output,
            exit_code=completed.returncode,
        )
