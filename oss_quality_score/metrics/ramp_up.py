"""Ramp-up metric.

Clones the repository as the first step toward measuring time from checkout
to a contributor's first pull request. Only the checkout is implemented; the
score is the policy's placeholder value.
"""

import shutil
import subprocess
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console

from oss_quality_score.metrics.base import MetricContext, MetricSpec
from oss_quality_score.repository import RepositoryIdentity

console = Console(stderr=True)

CLONE_TIMEOUT_SECONDS = 300


def is_git_available() -> bool:
    """Check if the git executable is installed."""
    return shutil.which("git") is not None


def clone_repository(identity: RepositoryIdentity, destination: Path) -> None:
    """
    Shallow, single-branch clone of the repository into destination.

    Raises:
        RuntimeError: If git is missing or the clone fails.
    """
    if not is_git_available():
        raise RuntimeError("git executable not found; cannot check out repository.")

    process = subprocess.run(
        [
            "git",
            "clone",
            "--depth",
            "1",
            "--single-branch",
            "--quiet",
            identity.clone_url,
            str(destination),
        ],
        capture_output=True,
        text=True,
        timeout=CLONE_TIMEOUT_SECONDS,
        check=False,
    )
    if process.returncode != 0:
        raise RuntimeError(
            f"Failed to clone {identity.slug}: {process.stderr.strip()}"
        )


def remove_checkout(path: Path) -> bool:
    """
    Remove a checkout directory. Safe to call repeatedly.

    Returns:
        True if the directory is gone afterwards, False if removal failed.
    """
    if not path.exists():
        return True
    try:
        shutil.rmtree(path)
    except OSError as e:
        console.print(f"[yellow]⚠️  Could not remove checkout {path}: {e}[/yellow]")
        return False
    return True


@contextmanager
def temporary_checkout(identity: RepositoryIdentity) -> Iterator[Path]:
    """
    Check out the repository into a temporary directory for the block.

    The directory name is unique per invocation and is removed on exit, even
    if the clone fails partway.
    """
    temp_dir = Path(tempfile.mkdtemp(prefix=f"oqs-rampup-{identity.name}-"))
    checkout_dir = temp_dir / identity.name
    try:
        clone_repository(identity, checkout_dir)
        yield checkout_dir
    finally:
        remove_checkout(temp_dir)


def _calculate(context: MetricContext) -> float:
    with temporary_checkout(context.identity):
        # TODO: score time-to-first-contribution from the checkout's history
        return context.policy.rampup_placeholder_score


METRIC = MetricSpec(
    name="rampup",
    calculator=_calculate,
    output_field="rampupScore",
    latency_field="rampup_latency",
    error_log="Ramp-up check incomplete",
)
