"""YAML lint gate — yamllint over rendered output, plus a blank-line check.

yamllint reads the rendered stream from stdin with an inline config, so
the chart is held to the same rules regardless of any .yamllint file in
the working directory.
"""

from __future__ import annotations

import logging
import re
import shutil
import subprocess

from chartcheck.core.models.harness import LintSettings
from chartcheck.core.models.render import LintProblem, LintReport

logger = logging.getLogger(__name__)

# stdin:3:1: [error] too many blank lines (1 > 0) (empty-lines)
_PARSABLE_RE = re.compile(
    r"^(?P<file>[^:]*):(?P<line>\d+):(?P<column>\d+): "
    r"\[(?P<level>\w+)\] (?P<message>.*?)(?: \((?P<rule>[\w-]+)\))?$"
)


def yamllint_config(settings: LintSettings) -> str:
    """Inline yamllint config (flow-style YAML) for ``-d``."""
    indent = "true" if settings.indent_sequences else "false"
    trailing = "enable" if settings.trailing_spaces else "disable"
    return (
        "{extends: default, rules: {"
        f"line-length: {{max: {settings.max_line_length}}}, "
        f"indentation: {{indent-sequences: {indent}}}, "
        f"trailing-spaces: {trailing}"
        "}}"
    )


def parse_problems(output: str) -> list[LintProblem]:
    """Parse ``yamllint -f parsable`` output; unrecognized lines are skipped."""
    problems: list[LintProblem] = []
    for line in output.splitlines():
        m = _PARSABLE_RE.match(line.strip())
        if not m:
            continue
        problems.append(LintProblem(
            line=int(m.group("line")),
            column=int(m.group("column")),
            level=m.group("level"),
            message=m.group("message"),
            rule=m.group("rule") or "",
        ))
    return problems


def lint_yaml(text: str, settings: LintSettings, *, binary: str = "yamllint", timeout: int = 60) -> LintReport:
    """Run yamllint over ``text``.

    Returns:
        LintReport; ``ok`` is False on any reported problem (errors only
        when ``settings.strict`` is off) or when yamllint cannot run.
    """
    if not settings.enabled:
        return LintReport(ok=True)

    if shutil.which(binary) is None:
        return LintReport(ok=False, error=f"{binary} CLI not found")

    cmd = [binary]
    if settings.strict:
        cmd.append("-s")
    cmd.extend(["-f", "parsable", "-d", yamllint_config(settings), "-"])

    try:
        r = subprocess.run(
            cmd,
            input=text + "\n",
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return LintReport(ok=False, error=f"{binary} timed out after {timeout}s")
    except OSError as e:
        return LintReport(ok=False, error=str(e))

    problems = parse_problems(r.stdout)

    # 0 = clean, 1 = errors, 2 = warnings only (with -s)
    if r.returncode not in (0, 1, 2):
        return LintReport(
            ok=False,
            problems=problems,
            output=r.stdout,
            error=r.stderr.strip() or f"{binary} exited with code {r.returncode}",
        )

    if problems:
        logger.debug("yamllint reported %d problem(s)", len(problems))

    return LintReport(ok=r.returncode == 0, problems=problems, output=r.stdout)


def find_blank_lines(text: str) -> list[int]:
    """1-based numbers of empty or whitespace-only lines between two newlines."""
    lines = text.split("\n")
    return [i + 1 for i in range(1, len(lines) - 1) if not lines[i].strip()]
