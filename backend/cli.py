import argparse
import json
import logging
import sys

from application.exceptions import EngineError
from backend.core.catalog import load_catalog
from backend.core.equipment import resolve_equipment
from backend.core.framework_selector import pick_framework_for_goal
from backend.core.random_source import SeededRandomSource
from backend.core.workout_generator import WorkoutGenerator
from backend.settings import get_settings
from domain.models import Framework, equipment_label


def _generate(args, settings) -> None:
    seed = args.seed if args.seed is not None else settings.random_seed
    rng = SeededRandomSource(seed)
    catalog = load_catalog(settings.catalog_path)

    if args.framework:
        framework = Framework(args.framework)
    else:
        framework = pick_framework_for_goal(args.goal, rng)

    workout = WorkoutGenerator(catalog, rng).generate(
        args.skill_score,
        args.equipment,
        args.goal,
        framework=framework,
    )
    print(json.dumps(workout.model_dump(mode="json"), indent=2))


def _equipment(args) -> None:
    resolved = resolve_equipment(args.items)
    print(json.dumps({
        "equipment": resolved.equipment.sorted_items(),
        "labels": [equipment_label(item) for item in resolved.equipment.sorted_items()],
        "richness": resolved.richness.value,
    }, indent=2))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate adaptive interval workouts")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a workout as JSON")
    generate.add_argument("--skill-score", type=int, required=True, help="Skill score 0-100")
    generate.add_argument(
        "--equipment", nargs="*", default=[],
        help="Equipment ids or legacy labels (default: bodyweight)",
    )
    generate.add_argument("--goal", default="", help="Goal id / focus label")
    generate.add_argument(
        "--framework", choices=[f.value for f in Framework],
        help="Fix the framework instead of drawing it from the goal bias",
    )
    generate.add_argument("--seed", type=int, help="Random seed for a replayable workout")

    equipment = subparsers.add_parser("equipment", help="Resolve an equipment selection")
    equipment.add_argument("items", nargs="*", help="Equipment ids or legacy labels")

    args = parser.parse_args(argv)

    try:
        settings = get_settings()
        logging.basicConfig(level=settings.log_level)

        if args.command == "generate":
            _generate(args, settings)
        else:
            _equipment(args)

    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except EngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
