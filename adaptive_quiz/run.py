"""
Adaptive Quiz: terminal front end.

Subcommands:
    play SUBJECT      take an adaptive quiz
    subjects          list subjects in the catalog
    add               add a question to the catalog
    remove-last       remove the most recently added question
    seed              load the bundled question bank

Usage:
    python -m adaptive_quiz.run seed
    python -m adaptive_quiz.run play Mathematics
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any, Dict, List, Optional

from .catalog import add_question, list_subjects, remove_last_question, seed_questions
from .config import config
from .controller import SessionController
from .errors import QuestionValidationError, QuizError
from .models.question import Question
from .observer import QuizObserver
from .storage import JsonQuizStore
from .utils.analytics import accuracy_by_difficulty, difficulty_series
from .utils.log import configure_logging

RANK_NAMES = {1: "Easy", 2: "Medium", 3: "Hard"}


class ConsoleObserver(QuizObserver):
    """Prints quiz events to a text stream."""

    def __init__(self, out=None):
        self.out = out or sys.stdout

    def echo(self, text: str = "") -> None:
        print(text, file=self.out)

    def on_question_ready(self, question: Question, position: int, total: int) -> None:
        self.echo()
        self.echo(f"Question {position}/{total}  [{question.difficulty}]")
        self.echo(question.text)
        for key, text in question.options.items():
            self.echo(f"  {key}: {text}")

    def on_answer_resolved(self, selected_option: Optional[str], correct_option: str) -> None:
        if selected_option is None:
            self.echo(f"Skipped. Correct answer: {correct_option}")
        elif selected_option == correct_option:
            self.echo("Correct!")
        else:
            self.echo(f"Incorrect. Correct answer: {correct_option}")

    def on_analytics_changed(self, snapshot: Dict[str, Any]) -> None:
        stats = snapshot["analytics"]
        self.echo(
            f"Answered {stats['answered']} | Correct {stats['correct']} | "
            f"Accuracy {stats['accuracy']}% | Ability {stats['ability']:.2f}"
        )

    def on_session_finished(self, snapshot: Dict[str, Any]) -> None:
        stats = snapshot["analytics"]
        self.echo()
        self.echo("Quiz completed!")
        self.echo(
            f"Score: {stats['correct']}/{stats['answered']} ({stats['accuracy']}%), "
            f"final ability {stats['ability']:.2f}"
        )

    def on_return_to_subjects(self) -> None:
        self.echo("Quiz closed.")

    def on_error(self, message: str) -> None:
        self.echo(f"Error: {message}")


def format_results(session) -> List[str]:
    """Per-question difficulty trail and per-band accuracy for a finished session."""
    lines = []
    for point in difficulty_series(session):
        mark = "ok" if point["correct"] else "x"
        lines.append(f"  {point['label']:>4}  {RANK_NAMES[point['rank']]:<6}  {mark}")
    for label, bucket in accuracy_by_difficulty(session).items():
        if bucket["answered"]:
            lines.append(
                f"  {label:<6} {bucket['correct']}/{bucket['answered']} ({bucket['accuracy']}%)"
            )
    return lines


async def play(store, subject: str, observer: ConsoleObserver, read_line=input, quiz_config=None) -> int:
    controller = SessionController(store, observer, quiz_config=quiz_config)
    try:
        await controller.start(subject)
    except QuizError:
        return 1

    finished = None
    try:
        while controller.is_active:
            if controller.session.current_question is None:
                if not controller.transition_pending:
                    break
                await controller.wait_idle()
                continue

            raw = await asyncio.to_thread(read_line, "Your answer (blank to skip, q to finish): ")
            choice = raw.strip().upper()
            if choice == "Q":
                finished = await controller.finish()
                break
            options = controller.session.current_question.options
            if choice and choice not in options:
                observer.echo(f"Please choose one of {', '.join(options)}.")
                continue
            await controller.answer(choice or None)
            session = controller.session
            await controller.wait_idle()
            if not controller.is_active:
                finished = session
    except QuizError:
        return 1
    finally:
        await controller.wait_idle()

    if finished is not None and finished.history:
        for line in format_results(finished):
            observer.echo(line)
    return 0


def _parse_options(pairs: List[str]) -> Dict[str, str]:
    options = {}
    for pair in pairs:
        key, sep, text = pair.partition("=")
        if not sep:
            raise QuestionValidationError([f"option {pair!r} must look like KEY=text"])
        options[key] = text
    return options


async def run_command(args, store, out=None) -> int:
    out = out or sys.stdout

    if args.command == "play":
        return await play(store, args.subject, ConsoleObserver(out))

    if args.command == "subjects":
        for subject in await list_subjects(store):
            print(subject, file=out)
        return 0

    if args.command == "add":
        try:
            question = await add_question(
                store,
                subject=args.subject,
                text=args.text,
                options=_parse_options(args.option),
                correct_answer=args.correct,
                difficulty=args.difficulty,
            )
        except QuestionValidationError as e:
            for error in e.errors:
                print(f"Error: {error}", file=out)
            return 1
        print(f"Question added! ({question.id})", file=out)
        return 0

    if args.command == "remove-last":
        try:
            question = await remove_last_question(store)
        except QuizError as e:
            print(str(e), file=out)
            return 1
        print(f"Last question removed! ({question.id})", file=out)
        return 0

    if args.command == "seed":
        written = await seed_questions(store)
        print(f"Seeded {written} question(s).", file=out)
        return 0

    raise ValueError(f"Unknown command {args.command!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="adaptive-quiz", description="Adaptive quiz in the terminal")
    parser.add_argument("--data-dir", default=None, help="Store directory (default: QUIZ_DATA_DIR)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: QUIZ_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    play_cmd = sub.add_parser("play", help="Take an adaptive quiz")
    play_cmd.add_argument("subject")

    sub.add_parser("subjects", help="List subjects")

    add_cmd = sub.add_parser("add", help="Add a question")
    add_cmd.add_argument("--subject", required=True)
    add_cmd.add_argument("--text", required=True)
    add_cmd.add_argument("--option", action="append", default=[], metavar="KEY=TEXT")
    add_cmd.add_argument("--correct", required=True)
    add_cmd.add_argument("--difficulty", required=True, choices=["easy", "medium", "hard"])

    sub.add_parser("remove-last", help="Remove the most recently added question")
    sub.add_parser("seed", help="Load the bundled question bank")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or config.logging.log_level)

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Config error: {error}", file=sys.stderr)
        return 2

    data_dir = args.data_dir or config.paths.data_dir
    store = JsonQuizStore(data_dir)
    return asyncio.run(run_command(args, store))


if __name__ == "__main__":
    sys.exit(main())
