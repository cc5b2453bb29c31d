"""
Command-line interface for atomic-commit.

This module is responsible for argument parsing, wiring the concrete
collaborators (git, the model provider, the console) and mapping the
workflow outcome to an exit status.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .ai.providers import SUPPORTED_PROVIDERS, load_generator
from .config import Config
from .errors import AtomicCommitError, IndexResetError, RestoreError, WorkflowCancelled
from .logging_utils import configure_logging
from .planner import WorkflowResult, print_execution_summary, run_commit
from .review import ConsolePrompter

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARTIAL = 2
EXIT_CANCELLED = 130


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="atomic-commit",
        description=(
            "Split the uncommitted changes of a git working tree into small, "
            "atomic commits planned by a language model."
        ),
    )

    parser.add_argument(
        "-C",
        dest="repo_path",
        metavar="PATH",
        help="Run as if started in PATH (default: current directory).",
    )
    parser.add_argument(
        "--provider",
        help=(
            "Model provider: "
            f"{', '.join(SUPPORTED_PROVIDERS)} (default: $ATOMIC_COMMIT_PROVIDER or openai)."
        ),
    )
    parser.add_argument(
        "--model",
        help="Model name (default: $ATOMIC_COMMIT_MODEL or gpt-4o-mini).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Negotiate a plan and print it without creating any commits.",
    )
    parser.add_argument(
        "-y",
        "--yes",
        dest="assume_yes",
        action="store_true",
        help="Accept the first proposed plan without asking.",
    )
    parser.add_argument(
        "--timeout",
        dest="command_timeout",
        type=float,
        help="Timeout in seconds for each git command.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be specified multiple times).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env(
            provider=args.provider,
            model=args.model,
            repo_path=args.repo_path,
            dry_run=args.dry_run,
            assume_yes=args.assume_yes,
            command_timeout=args.command_timeout,
            verbosity=args.verbose,
        )
        configure_logging(verbosity=config.verbosity)

        generator = load_generator(config)
        prompter = ConsolePrompter(assume_yes=config.assume_yes)
        result = run_commit(config, generator, prompter)
    except KeyboardInterrupt:
        # Graceful shutdown on Ctrl+C
        print("atomic-commit: cancelled", file=sys.stderr)
        return EXIT_CANCELLED
    except WorkflowCancelled as exc:
        if exc.report is not None:
            print_execution_summary(WorkflowResult(status="partial", report=exc.report))
        print(f"atomic-commit: cancelled: {exc}", file=sys.stderr)
        return EXIT_CANCELLED
    except RestoreError as exc:
        print(
            "atomic-commit: error: YOUR UNCOMMITTED CHANGES WERE NOT RESTORED.\n"
            f"atomic-commit: error: {exc}\n"
            "atomic-commit: error: they are kept in the stash; "
            "inspect 'git stash list' and recover them with 'git stash apply'.",
            file=sys.stderr,
        )
        return EXIT_ERROR
    except IndexResetError as exc:
        print(
            f"atomic-commit: error: {exc}\n"
            "atomic-commit: error: your uncommitted changes are back in the working "
            "tree but may still be staged; run 'git reset' to unstage them.",
            file=sys.stderr,
        )
        return EXIT_ERROR
    except AtomicCommitError as exc:
        print(f"atomic-commit: error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    print_execution_summary(result)
    if result.status == "partial":
        return EXIT_PARTIAL
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
