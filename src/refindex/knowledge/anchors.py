"""Anchor extraction - command names referenced by code blocks.

Shell listings contribute "program subcommand" anchors (``terraform init``),
HCL snippets contribute "block-type label" anchors (``backend s3``).
"""

import re
import shlex
from typing import Iterable, List

from refindex.knowledge.models import CodeBlock

SHELL_LANGUAGES = {"sh", "bash", "shell", "console", "zsh", "terminal", "shell-session"}
HCL_LANGUAGES = {"hcl", "terraform", "tf"}

# Prompts accepted at the start of a console line
PROMPT_PATTERN = re.compile(r"^(?:\$|>|%|PS>)\s+")

# Labelled HCL block header: resource "aws_s3_bucket" "state" {
HCL_BLOCK_PATTERN = re.compile(r'^\s*([A-Za-z_][\w-]*)\s+"([^"]+)"(?:\s+"[^"]*")*\s*\{')

# Leading words that wrap the real command
COMMAND_WRAPPERS = {"sudo", "env", "time", "exec", "command", "nohup"}

ENV_ASSIGNMENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*=")
PLAIN_WORD = re.compile(r"^[A-Za-z][\w.-]*$")


def split_shell_commands(content: str, require_prompt: bool = False) -> List[str]:
    """Split a shell listing into individual command lines.

    Handles:
    - Console prompts ("$ terraform init")
    - Backslash line continuation
    - Comment lines starting with '#'
    - Empty/whitespace-only lines

    Args:
        content: Code block content
        require_prompt: Only keep lines that start with a prompt; output
            lines of a console transcript are skipped

    Returns:
        List of command strings, prompts removed

    Example:
        >>> split_shell_commands("$ terraform init\\nInitializing...", require_prompt=True)
        ['terraform init']
    """
    commands: List[str] = []
    current: List[str] = []

    for line in content.splitlines():
        stripped = line.strip()

        if current:
            # Continuation of the previous line
            if stripped.endswith("\\"):
                current.append(stripped[:-1].rstrip())
                continue
            current.append(stripped)
            commands.append(" ".join(part for part in current if part))
            current = []
            continue

        if not stripped or stripped.startswith("#"):
            continue

        prompt = PROMPT_PATTERN.match(stripped)
        if prompt:
            stripped = stripped[prompt.end():]
        elif require_prompt:
            continue

        if stripped.endswith("\\"):
            current.append(stripped[:-1].rstrip())
            continue
        commands.append(stripped)

    if current:
        commands.append(" ".join(part for part in current if part))

    return [command for command in commands if command]


def command_anchor(command: str) -> str | None:
    """Return the "program subcommand" anchor of a command line.

    Example:
        >>> command_anchor("TF_LOG=debug terraform workspace new dev")
        'terraform workspace'
        >>> command_anchor("terraform -chdir=infra plan")
        'terraform plan'
        >>> command_anchor("ls")
        'ls'
    """
    # Only the first command of a pipeline or && chain
    command = re.split(r"\s*(?:\|\||&&|\||;)\s*", command, maxsplit=1)[0]
    try:
        words = shlex.split(command, comments=True)
    except ValueError:
        words = command.split()

    while words and (words[0] in COMMAND_WRAPPERS or ENV_ASSIGNMENT.match(words[0])):
        words = words[1:]
    if not words:
        return None

    program = words[0].rsplit("/", 1)[-1]
    if not PLAIN_WORD.match(program):
        return None

    for word in words[1:]:
        if word.startswith("-"):
            continue
        if PLAIN_WORD.match(word):
            return f"{program} {word}".lower()
        break
    return program.lower()


def hcl_anchors(content: str) -> List[str]:
    """Return "block-type label" anchors of labelled HCL blocks.

    Example:
        >>> hcl_anchors('terraform {\\n  backend "s3" {\\n    bucket = "b"\\n  }\\n}')
        ['backend s3']
    """
    anchors: List[str] = []
    for line in content.splitlines():
        match = HCL_BLOCK_PATTERN.match(line)
        if match:
            anchor = f"{match.group(1)} {match.group(2)}".lower()
            if anchor not in anchors:
                anchors.append(anchor)
    return anchors


def extract_anchors(blocks: Iterable[CodeBlock]) -> frozenset[str]:
    """Collect anchors from all code blocks of a section."""
    anchors: set[str] = set()
    for block in blocks:
        if block.language in SHELL_LANGUAGES:
            # console transcripts mix commands and output
            commands = split_shell_commands(block.content, require_prompt=block.language == "console")
        elif block.language in HCL_LANGUAGES:
            anchors.update(hcl_anchors(block.content))
            continue
        elif not block.language:
            commands = split_shell_commands(block.content, require_prompt=True)
        else:
            continue

        for command in commands:
            anchor = command_anchor(command)
            if anchor:
                anchors.add(anchor)
    return frozenset(anchors)
