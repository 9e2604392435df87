"""
Form Engine command line entry point.

Fill the form from a JSON file of field paths, validate it and submit it.

Usage:
    # Validate only
    python run_form.py signup.json --check

    # Submit to the configured endpoint
    python run_form.py signup.json --url http://localhost:9110/api/submissions

    # Submit to the simulated endpoint, optionally failing
    python run_form.py signup.json --simulate --fail "Server is down"
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add src to path for local development
sys.path.insert(0, str(Path(__file__).parent / "src"))

from form_engine import FormEngine, FormEngineError, HttpSubmitter, SimulatedSubmitter
from form_engine.config import get_config
from form_engine.logging_setup import setup_logging


def _print_errors(errors: dict[str, str]) -> None:
    for path, message in errors.items():
        print(f"  {path}: {message}")


async def _run(engine: FormEngine, check_only: bool) -> int:
    if check_only:
        errors = engine.validate()
        if errors:
            print("Invalid:")
            _print_errors(errors)
            return 1
        print("Valid.")
        return 0

    outcome = await engine.submit()
    if outcome.accepted:
        print("Submitted.")
        print(json.dumps(outcome.response, indent=2, default=str))
        return 0

    print(f"Not submitted ({outcome.status.value}):")
    _print_errors(outcome.errors)
    return 1


def main():
    """Main entry point."""
    config = get_config()

    parser = argparse.ArgumentParser(
        description="Form Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input file:
  A JSON object mapping field paths to values, for example
  {"firstName": "Ada", "address.city": "London", "hobbies": ["Chess"]}

Environment Variables:
  FORM_ENGINE_SUBMIT_URL         Submission endpoint (default: http://localhost:9110/api/submissions)
  FORM_ENGINE_SUBMIT_TIMEOUT     Request timeout in seconds (default: 30)
  FORM_ENGINE_SIMULATED_LATENCY  Delay of the simulated endpoint (default: 1.0)
  FORM_ENGINE_LOG_LEVEL          Log level (default: INFO)
        """,
    )

    parser.add_argument("values", type=Path, help="JSON file of field path -> value")
    parser.add_argument("--check", action="store_true", help="Validate only, do not submit")
    parser.add_argument(
        "--url",
        default=config.submit_url,
        help=f"Submission endpoint (default: {config.submit_url})",
    )
    parser.add_argument("--simulate", action="store_true", help="Use the simulated endpoint")
    parser.add_argument("--fail", metavar="MESSAGE", help="Make the simulated endpoint fail")
    parser.add_argument("--log-file", default=config.log_file, help="Also log JSON lines to this file")
    parser.add_argument("-v", "--verbose", action="store_true", default=config.verbose_output)

    args = parser.parse_args()

    setup_logging(verbose=args.verbose, file_path=args.log_file)

    if args.simulate:
        submitter = SimulatedSubmitter(fail_with=args.fail)
    else:
        submitter = HttpSubmitter(args.url, timeout=config.submit_timeout)

    try:
        values = json.loads(args.values.read_text(encoding="utf-8"))
        if not isinstance(values, dict):
            raise ValueError("Input file must contain a JSON object")
        engine = FormEngine(submitter=submitter, config=config)
        engine.update(values)
    except (OSError, ValueError, FormEngineError) as e:
        print(f"Error: {e}")
        sys.exit(2)

    sys.exit(asyncio.run(_run(engine, args.check)))


if __name__ == "__main__":
    main()
