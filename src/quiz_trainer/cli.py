"""Console entry point for the quiz trainer shell."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from importlib import metadata
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich.console import Console

from .core import (
    ConfigError,
    TrainerConfig,
    WorkspaceError,
    WorkspaceLayout,
    configure_logger,
    ensure_workspace,
    load_config,
    resolve_config_path,
)
from .quizzer import (
    Dispatcher,
    GameEngine,
    Prompter,
    QuizConsole,
    QuizError,
    QuizRepository,
    SessionCommands,
    build_command_specs,
    run_shell,
)
from .quizzer.prompter import InputProvider

LOGGER_NAME = "quiz_trainer"


def _print(
    text: str, *, stream: Optional[Callable[[str], None]] = None
) -> None:
    target = stream if stream is not None else sys.stdout.write
    if text:
        target(text + "\n")


def _version() -> str:
    try:
        return metadata.version("quiz-trainer")
    except metadata.PackageNotFoundError:
        return "unknown"


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="quiz-trainer",
        description="Interactive question/answer quiz trainer",
    )
    p.add_argument(
        "--workspace",
        type=Path,
        help="Workspace directory (defaults to $QUIZ_TRAINER_HOME or "
        "~/.quiz-trainer)",
    )
    p.add_argument(
        "--config",
        type=Path,
        help="TOML config file (defaults to <workspace>/config/"
        "quiz-trainer.toml)",
    )
    p.add_argument(
        "--verbose",
        action="store_true",
        help="Mirror log records to stderr",
    )
    p.add_argument("-V", "--version", action="version", version=_version())
    return p


def build_dispatcher(
    config: TrainerConfig,
    repository: QuizRepository,
    console: QuizConsole,
    prompter: Prompter,
    *,
    logger: logging.Logger,
    rng: Optional[random.Random] = None,
) -> Dispatcher:
    commands = SessionCommands(
        repository,
        console,
        prompter,
        credits=config.credits.authors,
        logger=logger.getChild("commands"),
    )
    game = GameEngine(
        repository,
        console,
        prompter,
        rng=rng,
        logger=logger.getChild("game"),
    )
    return Dispatcher(
        build_command_specs(commands, game),
        console,
        logger=logger.getChild("dispatcher"),
    )


def _prepare(
    args: argparse.Namespace,
) -> tuple[WorkspaceLayout, TrainerConfig]:
    layout = ensure_workspace(path=args.workspace)
    config_path = resolve_config_path(
        args.config, config_dir=layout.path_for("config")
    )
    return layout, load_config(config_path)


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    input_provider: Optional[InputProvider] = None,
    console: Optional[Console] = None,
    rng: Optional[random.Random] = None,
) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        layout, config = _prepare(args)
        logger, log_path = configure_logger(
            LOGGER_NAME,
            log_dir=layout.path_for("logs"),
            level=config.logging.level,
            verbose=bool(args.verbose or config.logging.verbose),
        )
        repository = QuizRepository(
            config.storage_path(layout.path_for("data")),
            seed_defaults=config.storage.seed_defaults,
            logger=logger.getChild("repository"),
        )
    except (WorkspaceError, ConfigError, QuizError, OSError) as exc:
        _print(f"Error: {exc}", stream=sys.stderr.write)
        return 2

    logger.info(
        "Shell started",
        extra={
            "event": "shell.start",
            "workspace": layout.home,
            "config": config.source,
            "store": repository.path,
            "log_file": log_path,
        },
    )
    quiz_console = QuizConsole(console)
    prompter = Prompter(
        quiz_console,
        input_provider,
        style=config.shell.question_style,
    )
    dispatcher = build_dispatcher(
        config, repository, quiz_console, prompter, logger=logger, rng=rng
    )

    quiz_console.banner("Quiz Trainer", "green")
    code = run_shell(
        dispatcher,
        prompter,
        quiz_console,
        prompt=config.shell.prompt,
        prompt_style=config.shell.prompt_style,
    )
    logger.info("Shell finished", extra={"event": "shell.stop"})
    return code


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - manual invocation guard
    main_entry()
