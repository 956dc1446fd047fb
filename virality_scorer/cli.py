import argparse
import sys
import json
import asyncio
import logging
from typing import get_args

from . import engine
from .ai_insights import OPTIMIZATION_PROMPTS, generate_hooks, optimize_post
from .scoring import ScoringProfile
from .types import (
    AdvancedAnalysisParams,
    EngagementLevel,
    FollowerRange,
    HybridOptions,
    Industry,
)


def _add_text_args(parser: argparse.ArgumentParser, suffix: str = "", label: str = "Post"):
    flag = f"-{suffix}" if suffix else ""
    parser.add_argument(f"--text{flag}", type=str, help=f"{label} text")
    parser.add_argument(
        f"--file{flag}", type=str, help=f"Path to a UTF-8 file holding the {label.lower()} text"
    )


def _add_audience_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--followers", choices=get_args(FollowerRange), help="Author follower range"
    )
    parser.add_argument("--industry", choices=get_args(Industry), help="Author industry")
    parser.add_argument(
        "--engagement-level",
        choices=get_args(EngagementLevel),
        help="Author's typical engagement level",
    )


def _add_output_arg(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--output", type=str, help="Path to save JSON output (optional)"
    )


def _read_text(text: str | None, path: str | None) -> str:
    if text is not None:
        return text
    if path:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    if not sys.stdin.isatty():
        return sys.stdin.read()
    raise ValueError("Provide --text, --file, or pipe the post on stdin")


def _params(args) -> AdvancedAnalysisParams | None:
    values = {
        "followerRange": args.followers,
        "industry": args.industry,
        "engagementLevel": args.engagement_level,
    }
    values = {k: v for k, v in values.items() if v is not None}
    if not values:
        return None
    return AdvancedAnalysisParams(**values)


def _hybrid_options(args) -> HybridOptions:
    return HybridOptions(
        useAI=not args.skip_ai,
        preferEnhanced=not args.prefer_ai,
        confidenceThreshold=args.threshold,
    )


def _emit(output_json: str, path: str | None):
    if path:
        with open(path, "w", encoding="utf-8") as f:
            f.write(output_json)
        print(f"Saved output to {path}")
    else:
        print(output_json)


def _dump_list(items) -> str:
    return json.dumps([item.model_dump() for item in items], indent=2, ensure_ascii=False)


def main():
    parser = argparse.ArgumentParser(description="LinkedIn Post Virality Scorer")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: analyze
    ana_parser = subparsers.add_parser("analyze", help="Score a single post")
    _add_text_args(ana_parser)
    _add_audience_args(ana_parser)
    ana_parser.add_argument(
        "--profile",
        choices=[p.value for p in ScoringProfile],
        help="Scoring profile (defaults to VIRALITY_DEFAULT_PROFILE)",
    )
    _add_output_arg(ana_parser)

    # Command: compare
    cmp_parser = subparsers.add_parser("compare", help="Compare two post variants")
    _add_text_args(cmp_parser, "a", "First post")
    _add_text_args(cmp_parser, "b", "Second post")
    _add_audience_args(cmp_parser)
    cmp_parser.add_argument(
        "--ai",
        action="store_true",
        help="Blend AI analysis into both sides before comparing",
    )
    _add_output_arg(cmp_parser)

    # Command: suggest
    sug_parser = subparsers.add_parser("suggest", help="Rule-based improvement suggestions")
    _add_text_args(sug_parser)
    sug_parser.add_argument(
        "--ai",
        action="store_true",
        help="Put LLM suggestions for the weakest factors ahead of the rules",
    )
    _add_output_arg(sug_parser)

    # Command: timeseries
    ts_parser = subparsers.add_parser(
        "timeseries", help="Projected hourly engagement curve"
    )
    _add_text_args(ts_parser)
    _add_audience_args(ts_parser)
    ts_parser.add_argument("--hours", type=int, default=24, help="Number of hours")
    _add_output_arg(ts_parser)

    # Command: hybrid
    hyb_parser = subparsers.add_parser(
        "hybrid", help="Deterministic score blended with an LLM opinion"
    )
    _add_text_args(hyb_parser)
    _add_audience_args(hyb_parser)
    hyb_parser.add_argument(
        "--skip-ai",
        action="store_true",
        help="Skip the LLM call, deterministic analysis only",
    )
    hyb_parser.add_argument(
        "--prefer-ai",
        action="store_true",
        help="Give the AI side more weight when blending",
    )
    hyb_parser.add_argument(
        "--threshold",
        type=float,
        help="Minimum AI confidence (0-1) before AI scores are blended",
    )
    _add_output_arg(hyb_parser)

    # Command: hooks
    hook_parser = subparsers.add_parser("hooks", help="Generate opening hooks for an idea")
    hook_parser.add_argument("--idea", type=str, required=True, help="Post idea")
    _add_output_arg(hook_parser)

    # Command: optimize
    opt_parser = subparsers.add_parser("optimize", help="Rewrite a post to improve one factor")
    _add_text_args(opt_parser)
    opt_parser.add_argument(
        "--type",
        dest="optimization_type",
        choices=list(OPTIMIZATION_PROMPTS),
        required=True,
        help="Factor to improve",
    )
    _add_output_arg(opt_parser)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "analyze":
        try:
            text = _read_text(args.text, args.file)
            metrics = engine.analyze(text, _params(args), args.profile)
            _emit(metrics.model_dump_json(indent=2), args.output)
        except Exception as e:
            print(f"Analysis failed: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "compare":
        try:
            text_a = _read_text(args.text_a, args.file_a)
            text_b = _read_text(args.text_b, args.file_b)
            if args.ai:
                result = asyncio.run(engine.compare_with_ai(text_a, text_b, _params(args)))
            else:
                result = engine.compare(text_a, text_b, _params(args))
            _emit(result.model_dump_json(indent=2), args.output)
        except Exception as e:
            print(f"Comparison failed: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "suggest":
        try:
            text = _read_text(args.text, args.file)
            items = []
            if args.ai:
                items = asyncio.run(engine.generate_ai_suggestions(text))
                if not items:
                    print("AI suggestions unavailable, using rule-based suggestions", file=sys.stderr)
            items = items or engine.generate_suggestions(text)
            _emit(_dump_list(items), args.output)
        except Exception as e:
            print(f"Suggestions failed: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "timeseries":
        try:
            text = _read_text(args.text, args.file)
            points = engine.generate_time_series(text, args.hours, _params(args))
            _emit(_dump_list(points), args.output)
        except Exception as e:
            print(f"Time series failed: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "hybrid":
        try:
            text = _read_text(args.text, args.file)
            result = asyncio.run(
                engine.hybrid_analyze(text, _params(args), _hybrid_options(args))
            )
            _emit(result.model_dump_json(indent=2), args.output)
        except Exception as e:
            print(f"Hybrid analysis failed: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "hooks":
        try:
            hooks = asyncio.run(generate_hooks(args.idea))
            if not hooks:
                print("No hooks generated (is an LLM API key configured?)", file=sys.stderr)
                sys.exit(1)
            _emit(_dump_list(hooks), args.output)
        except Exception as e:
            print(f"Hook generation failed: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "optimize":
        try:
            text = _read_text(args.text, args.file)
            optimized = asyncio.run(optimize_post(text, args.optimization_type))
            if optimized is None:
                print("Optimization unavailable (empty or oversized post, or no LLM configured)", file=sys.stderr)
                sys.exit(1)
            _emit(json.dumps({"optimizedContent": optimized}, indent=2, ensure_ascii=False), args.output)
        except Exception as e:
            print(f"Optimization failed: {e}", file=sys.stderr)
            sys.exit(1)

    else:
        parser.print_help()


if __name__ == "__main__":
    main()
