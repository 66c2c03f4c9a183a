"""CRM record store — command-line access to contacts, opportunities, projects, tasks.

Usage:
  # List active high-priority projects
  python crm.py list projects --status active --priority high

  # Show one task
  python crm.py get tasks 42

  # Create a contact (JSON object, or a list of them for a bulk create)
  python crm.py create contacts --data '{"firstName": "John", "lastName": "Doe", "tags": ["VIP"]}'

  # Update a task (records must carry their Id; only the given fields change)
  python crm.py update tasks --data '{"Id": 42, "title": "Ship it", "status": "done"}'

  # Delete records
  python crm.py delete opportunities 7 8

  # Pipeline breakdown over all opportunities
  python crm.py pipeline

Settings come from APPER_* environment variables (see .env.example).
"""
import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from typing import Any, List, Optional

from pipeline_stats import stage_summary, total_value
from schemas import PIPELINE_STAGES
from store import CrmServices, RecordStoreError, build_services, get_store, load_config
from store.services import ENTITY_NAMES

logger = logging.getLogger(__name__)

FILTER_OPTIONS = ("status", "priority", "category", "project_id", "stage")


def _parse_records(raw: str) -> List[dict]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"--data is not valid JSON: {exc}") from exc
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list) and all(isinstance(d, dict) for d in data):
        return data
    raise ValueError("--data must be a JSON object or a list of objects")


def _bulk_output(result) -> dict:
    return {
        "records": result.records,
        "failures": [asdict(f) for f in result.failures],
        "submitted": result.submitted,
    }


async def dispatch(args: argparse.Namespace, services: CrmServices) -> Any:
    """Run one parsed command against the adapters and return its JSON-able result."""
    if args.command == "list":
        filters = {key: getattr(args, key) for key in FILTER_OPTIONS if getattr(args, key, None)}
        return await services.adapter(args.entity).fetch(filters)

    if args.command == "get":
        return await services.adapter(args.entity).get_by_id(args.id)

    if args.command == "create":
        result = await services.adapter(args.entity).create(_parse_records(args.data))
        return _bulk_output(result)

    if args.command == "update":
        result = await services.adapter(args.entity).update(_parse_records(args.data))
        return _bulk_output(result)

    if args.command == "delete":
        deleted = await services.adapter(args.entity).delete(args.ids)
        return {"deleted": deleted, "ids": args.ids}

    if args.command == "pipeline":
        opportunities = await services.opportunities.fetch()
        return {
            "total_opportunities": len(opportunities),
            "total_value": total_value(opportunities),
            "stages": stage_summary(opportunities),
        }

    raise ValueError(f"Unknown command {args.command!r}")


async def run_command(args: argparse.Namespace) -> int:
    try:
        config = load_config()
    except RuntimeError as exc:
        logger.error("%s", exc)
        return 1
    async with get_store(config) as store:
        services = build_services(store)
        try:
            result = await dispatch(args, services)
        except (RecordStoreError, ValueError) as exc:
            logger.error("%s", exc)
            return 1
    print(json.dumps(result, indent=2, default=str))
    return 0


def _record_id(value: str) -> Any:
    # Store ids are integers; keep anything else as given.
    return int(value) if value.isdigit() else value


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CRM record store: contacts, opportunities, projects, tasks"
    )
    sub = parser.add_subparsers(dest="command")

    list_cmd = sub.add_parser("list", help="List records, newest first")
    list_cmd.add_argument("entity", choices=ENTITY_NAMES)
    list_cmd.add_argument("--status", help="projects/tasks status")
    list_cmd.add_argument("--priority", choices=("low", "medium", "high"))
    list_cmd.add_argument("--category", help="tasks category")
    list_cmd.add_argument("--project-id", dest="project_id", type=_record_id, help="tasks of one project")
    list_cmd.add_argument("--stage", choices=PIPELINE_STAGES, help="contacts/opportunities stage")

    get_cmd = sub.add_parser("get", help="Show one record")
    get_cmd.add_argument("entity", choices=ENTITY_NAMES)
    get_cmd.add_argument("id", type=_record_id)

    create_cmd = sub.add_parser("create", help="Create records from JSON")
    create_cmd.add_argument("entity", choices=ENTITY_NAMES)
    create_cmd.add_argument("--data", required=True, help="JSON object or list of objects")

    update_cmd = sub.add_parser("update", help="Update records from JSON (each needs an Id)")
    update_cmd.add_argument("entity", choices=ENTITY_NAMES)
    update_cmd.add_argument("--data", required=True, help="JSON object or list of objects")

    delete_cmd = sub.add_parser("delete", help="Delete records by id")
    delete_cmd.add_argument("entity", choices=ENTITY_NAMES)
    delete_cmd.add_argument("ids", nargs="+", type=_record_id)

    sub.add_parser("pipeline", help="Opportunity count/value/share per pipeline stage")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    return asyncio.run(run_command(args))


if __name__ == "__main__":
    sys.exit(main())
