#!/usr/bin/env python3
"""
CLI for generating a personalized children's story.

Usage:
    python cli/generate_story.py "Ayşe" --age 3-5 --theme "Uzay Macerası"
    python cli/generate_story.py "Mert" --age 6-8 --gender boy --advice "sharing" --hair brown
    python cli/generate_story.py "Ayşe" --output my_story/ --verbose
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from masal.config import configure_dspy, OUTPUT_DIR, STORAGE_PATH  # noqa: E402
from masal.core import (  # noqa: E402
    AgeGroup,
    CooldownState,
    ErrorState,
    Gender,
    GeneratingImages,
    GeneratingStory,
    QuotaRejection,
    Reading,
    UserInput,
)
from masal.core.client import AssetClient  # noqa: E402
from masal.core.export import safe_dirname, save_story  # noqa: E402
from masal.core.programs import StoryOrchestrator, QUOTA_EXHAUSTED_MESSAGE  # noqa: E402
from masal.core.quota import QuotaLedger  # noqa: E402
from masal.core.storage import JsonFileStore  # noqa: E402
from masal.logging import configure_logging  # noqa: E402

EXIT_ERROR = 1
EXIT_QUOTA = 2


def print_state(state) -> None:
    if isinstance(state, GeneratingStory):
        print("Writing the story...")
    elif isinstance(state, GeneratingImages):
        print(f"\rDrawing pictures and recording narration... {state.percentage:5.1f}%", end="", flush=True)
        if state.percentage >= 100:
            print()
    elif isinstance(state, CooldownState):
        print(f"\rPlease wait {state.seconds_left}s before the next story...", end="", flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate an illustrated, narrated children's story",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("child_name", type=str, help="Name of the story's hero")
    parser.add_argument(
        "--age",
        type=AgeGroup,
        choices=list(AgeGroup),
        default=AgeGroup.CHILD,
        help="Age group (default: 6-8)",
    )
    parser.add_argument(
        "--gender",
        type=Gender,
        choices=list(Gender),
        default=Gender.NEUTRAL,
        help="Hero's gender (default: unspecified)",
    )
    parser.add_argument("--theme", type=str, default="", help="Story theme or category")
    parser.add_argument("--advice", type=str, default="", help="Moral the story should carry")
    parser.add_argument("--hair", type=str, default=None, help="Hair color")
    parser.add_argument("--eyes", type=str, default=None, help="Eye color")
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help=f"Directory to export the story into (default: {OUTPUT_DIR}/<title>)",
    )
    parser.add_argument(
        "--storage",
        type=Path,
        default=STORAGE_PATH,
        help="Local storage file holding quota and promo state",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Print progress information")
    parser.add_argument("--json-logs", action="store_true", help="Log as JSON lines")
    return parser


def parse_user_input(parser: argparse.ArgumentParser, args) -> UserInput:
    """Build the story request, reporting invalid fields as usage errors."""
    try:
        return UserInput(
            child_name=args.child_name,
            age_group=args.age,
            gender=args.gender,
            theme=args.theme,
            advice=args.advice,
            hair_color=args.hair,
            eye_color=args.eyes,
        )
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        parser.error(f"invalid story request: {problems}")


async def run(args, user_input: UserInput) -> int:
    ledger = QuotaLedger(JsonFileStore(args.storage))

    # Quota is checked before any model setup
    if ledger.check_quota().exhausted:
        print(QUOTA_EXHAUSTED_MESSAGE, file=sys.stderr)
        return EXIT_QUOTA

    try:
        configure_dspy()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR

    orchestrator = StoryOrchestrator(
        client=AssetClient(),
        ledger=ledger,
        on_state=print_state if args.verbose else None,
    )

    result = await orchestrator.submit(user_input)

    if isinstance(result, QuotaRejection):
        print(result.message, file=sys.stderr)
        return EXIT_QUOTA
    if isinstance(result, ErrorState):
        print(result.message, file=sys.stderr)
        return EXIT_ERROR

    assert isinstance(result, Reading)
    story = result.story
    story_dir = args.output or OUTPUT_DIR / safe_dirname(story.title)
    story_path = save_story(story, story_dir)

    print(story.to_formatted_string())
    print(f"Story saved to: {story_path}")

    if args.verbose:
        narrated = sum(1 for page in story.pages if page.has_narration)
        quota = orchestrator.quota_status()
        print("\n--- Generation Summary ---")
        print(f"Title: {story.title}")
        print(f"Pages: {story.page_count}")
        print(f"Narrated pages: {narrated}/{story.page_count}")
        print(f"Remaining credits: {quota.remaining}")
    return 0


def main():
    parser = build_parser()
    args = parser.parse_args()
    user_input = parse_user_input(parser, args)
    configure_logging(json_format=args.json_logs, level=logging.INFO if args.verbose else logging.WARNING)
    sys.exit(asyncio.run(run(args, user_input)))


if __name__ == "__main__":
    main()
