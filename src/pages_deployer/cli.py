"""Command-line interface for pages-deployer."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional

from .config import DeploymentConfig, load_config
from .workflow import DeploymentWorkflow

# CLI flag dest -> config field
_OVERRIDES = (
    "folder",
    "branch",
    "base_branch",
    "target_folder",
    "repository_name",
    "repository_path",
    "commit_message",
    "clean_exclude",
    "workspace",
)


@dataclass
class CLIContext:
    """Context captured from CLI arguments."""

    config: DeploymentConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pages-deployer",
        description="Publish a build folder to a branch of a git repository.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a JSON config file overriding defaults.",
    )
    parser.add_argument(
        "--workspace",
        type=str,
        default=None,
        help="Repository working directory (default: $GITHUB_WORKSPACE or cwd).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    deploy_parser = subparsers.add_parser(
        "deploy", help="Deploy the build folder to the deployment branch"
    )
    # SUPPRESS keeps an unset sub-command flag from clobbering the global one
    deploy_parser.add_argument(
        "--workspace", default=argparse.SUPPRESS, help="Repository working directory"
    )
    deploy_parser.add_argument("--folder", help="Build folder, relative to the workspace")
    deploy_parser.add_argument("--branch", help="Branch to deploy to, e.g. gh-pages")
    deploy_parser.add_argument("--base-branch", help="Branch the deployment is made from")
    deploy_parser.add_argument(
        "--target-folder", help="Sub-folder of the deployment branch to deploy into"
    )
    deploy_parser.add_argument(
        "--repository-name", help="owner/name of the repository to push to"
    )
    deploy_parser.add_argument(
        "--repository-path",
        help="Full remote URL; overrides the one built from the repository name",
    )
    deploy_parser.add_argument("--commit-message", help="Custom commit message")
    deploy_parser.add_argument(
        "--clean", action="store_true", default=None,
        help="Delete files on the branch that are not in the build folder",
    )
    deploy_parser.add_argument(
        "--clean-exclude",
        help='JSON list of paths clean must keep, e.g. \'["keep.txt"]\'',
    )
    deploy_parser.add_argument(
        "--ssh", action="store_true", default=None,
        help="Push over SSH with an already configured deploy key",
    )
    deploy_parser.add_argument(
        "--test", action="store_true", default=None, dest="is_test",
        help="Test mode: never create the branch, always commit",
    )
    deploy_parser.add_argument(
        "--debug", action="store_true", default=None,
        help="Show the output of every git command",
    )

    return parser


def _build_context(args: argparse.Namespace) -> CLIContext:
    config = load_config(args.config)
    for name in _OVERRIDES:
        value = getattr(args, name, None)
        if value is not None:
            setattr(config, name, value)
    for flag in ("clean", "ssh", "is_test", "debug"):
        if getattr(args, flag, None):
            setattr(config, flag, True)
    return CLIContext(config=config)


def dispatch_command(args: argparse.Namespace) -> int:
    context = _build_context(args)

    if args.command == "deploy":
        outcome = DeploymentWorkflow().run(context.config)
        return 0 if outcome.success else 1

    raise ValueError(f"Unsupported command: {args.command}")


def run_cli(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return dispatch_command(args)
