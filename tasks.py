"""Invoke tasks for working on Sortify.

Every task shells out to the `uv` CLI so the virtual environment, builds, and
test runs all go through one tool.
"""

from __future__ import annotations

import shlex
import shutil
from collections.abc import Sequence
from pathlib import Path

from invoke import Collection, Context, task

PROJECT_ROOT = Path(__file__).parent
DIST_DIR = PROJECT_ROOT / "dist"


def _uv(ctx: Context, args: Sequence[str], *, dry_run: bool = False) -> None:
    """Run ``uv`` with ``args``, or only print the command when ``dry_run`` is set."""
    command = shlex.join(("uv", *args))
    if dry_run:
        print(f"[dry-run] {command}")
        return
    ctx.run(command, echo=True, pty=True)


@task(help={"test": "Install the test extra as well."})
def sync(ctx: Context, test: bool = True) -> None:
    """Create or refresh the project environment."""
    args = ["sync"]
    if test:
        args.extend(["--extra", "test"])
    _uv(ctx, args)


@task(help={"clean": "Empty dist/ before building."})
def build(ctx: Context, clean: bool = False) -> None:
    """Build the sdist and wheel into `dist/`."""
    if clean and DIST_DIR.exists():
        shutil.rmtree(DIST_DIR)
    _uv(ctx, ["build"])


@task(
    help={
        "k": "pytest -k expression for test selection.",
        "path": "Path or module to test (defaults to tests/).",
        "options": "Additional flags forwarded verbatim to pytest.",
    }
)
def tests(ctx: Context, k: str = "", path: str = "tests", options: str = "") -> None:
    """Run the pytest suite."""
    args: list[str] = ["run", "pytest"]
    if k:
        args.extend(["-k", k])
    if options:
        args.extend(shlex.split(options))
    args.append(path)
    _uv(ctx, args)


@task(help={"fix": "Let ruff apply safe fixes."})
def lint(ctx: Context, fix: bool = False) -> None:
    """Lint sources and tests with ruff."""
    args = ["run", "ruff", "check", "src", "tests"]
    if fix:
        args.append("--fix")
    _uv(ctx, args)


@task(help={"directory": "Directory to preview (defaults to the current one)."})
def preview(ctx: Context, directory: str = ".") -> None:
    """Show what `sortify sort` would do to DIRECTORY without moving anything."""
    _uv(ctx, ["run", "sortify", "sort", directory, "--dry-run", "--no-check-updates"])


@task
def ci(ctx: Context) -> None:
    """Run lint and tests the way CI does."""
    ctx.invoke(lint)
    ctx.invoke(tests)


namespace = Collection(sync, build, tests, lint, preview, ci)
