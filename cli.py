import argparse
import json
import sys

from config.settings import get_settings
from db import schema
from db.connection import get_connection
from db.repos.kv_repo import KeyValueRepo
from services.errors import FormInvalid
from services.reporting import print_field_errors, print_roster
from services.roster_controller import RosterController
from services.roster_store import Outcome, RosterStore
from services.seed_loader import SeedLoader
from sources.registry import source_for
from utils.logging_setup import init_logging
import sources  # noqa: F401 ensure registration


FORM_OPTIONS = [
    ("first_name", "firstName"),
    ("last_name", "lastName"),
    ("id_number", "idNumber"),
    ("phone", "phone"),
    ("email", "email"),
]


def _open_storage(args) -> KeyValueRepo:
    conn = get_connection(args.db)
    schema.bootstrap(conn)
    return KeyValueRepo(conn)


def _build_controller(args) -> RosterController:
    settings = get_settings()
    storage = _open_storage(args)
    store = RosterStore(
        storage,
        key=settings.storage_key,
        enforce_unique_id_number=settings.enforce_unique_id_number,
        strict=settings.strict_storage,
    )
    loader = SeedLoader(
        source_for(args.seed_url, settings),
        storage,
        key=settings.storage_key,
        overwrite=settings.seed_overwrite,
    )
    controller = RosterController(store, loader)
    controller.start()
    return controller


def _report(outcome: Outcome, verb: str) -> int:
    if outcome.ok:
        record = outcome.record
        print(f"{verb} {record.id} ({record.first_name} {record.last_name}, {record.id_number})")
        return 0
    if isinstance(outcome.error, FormInvalid):
        print_field_errors(outcome.error.field_errors)
    else:
        print(f"Nothing {verb.lower()}: {outcome.error}")
    return 1


def cmd_bootstrap(args):
    storage = _open_storage(args)
    keys = storage.keys()
    print(f"Storage ready ({len(keys)} keys)")
    return 0


def cmd_seed(args):
    settings = get_settings()
    storage = _open_storage(args)
    loader = SeedLoader(
        source_for(args.seed_url, settings),
        storage,
        key=settings.storage_key,
        overwrite=args.overwrite or settings.seed_overwrite,
    )
    result = loader.run()
    if result.status == "seeded":
        print(f"Seeded {result.count} records")
    elif result.status == "skipped":
        print("Storage already holds a roster; use --overwrite to replace it")
    else:
        print(f"Seed failed: {result.error}")
        return 1
    return 0


def cmd_list(args):
    controller = _build_controller(args)
    rows = controller.search(args.search or "")
    if args.json:
        print(json.dumps([r.to_storage() for r in rows], indent=2, ensure_ascii=False))
    else:
        print_roster(rows, len(controller.store), args.search)
    return 0


def cmd_show(args):
    controller = _build_controller(args)
    record = controller.store.get(args.id)
    if record is None:
        print("No record found for id")
        return 1
    print(json.dumps(record.to_storage(), indent=2, ensure_ascii=False))
    return 0


def cmd_add(args):
    controller = _build_controller(args)
    for attr, name in FORM_OPTIONS:
        controller.form.set_value(name, getattr(args, attr))
    return _report(controller.on_submit(), "Added")


def cmd_update(args):
    controller = _build_controller(args)
    record = controller.store.get(args.id)
    if record is None:
        print("No record found for id")
        return 1
    controller.fill_form(record)
    for attr, name in FORM_OPTIONS:
        value = getattr(args, attr)
        if value is not None:
            controller.form.set_value(name, value)
    return _report(controller.save_changes(), "Updated")


def cmd_delete(args):
    controller = _build_controller(args)
    record = controller.store.get(args.id)
    if record is None:
        print("No record found for id")
        return 1
    controller.fill_form(record)
    return _report(controller.delete_student(), "Deleted")


def _add_form_arguments(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--first-name", dest="first_name", required=required)
    parser.add_argument("--last-name", dest="last_name", required=required)
    parser.add_argument("--id-number", dest="id_number", required=required, help="7-10 characters")
    parser.add_argument("--phone", required=required, help="7-11 characters")
    parser.add_argument("--email", required=required)


def main(argv=None) -> int:
    settings = get_settings()
    init_logging(settings.log_level)
    parser = argparse.ArgumentParser(description="Student roster CLI")
    parser.add_argument("--db", default=settings.db_path, help="Path to SQLite storage (default from settings)")
    parser.add_argument("--seed-url", default=settings.seed_url, help="Seed asset path or http(s) URL (default from settings)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_boot = sub.add_parser("bootstrap", help="Create the storage table")
    p_boot.set_defaults(func=cmd_bootstrap)

    p_seed = sub.add_parser("seed", help="Write the seed asset into empty storage")
    p_seed.add_argument("--overwrite", action="store_true", help="Replace stored records even if present")
    p_seed.set_defaults(func=cmd_seed)

    p_list = sub.add_parser("list", help="List records, optionally filtered by idNumber substring")
    p_list.add_argument("--search", "-s", default="", help="Substring of idNumber (case-sensitive)")
    p_list.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    p_list.set_defaults(func=cmd_list)

    p_show = sub.add_parser("show", help="Print one record as JSON")
    p_show.add_argument("--id", required=True, help="Record id")
    p_show.set_defaults(func=cmd_show)

    p_add = sub.add_parser("add", help="Submit the form as a new record")
    _add_form_arguments(p_add, required=True)
    p_add.set_defaults(func=cmd_add)

    p_upd = sub.add_parser("update", help="Select a record, change fields and save")
    p_upd.add_argument("--id", required=True, help="Record id")
    _add_form_arguments(p_upd, required=False)
    p_upd.set_defaults(func=cmd_update)

    p_del = sub.add_parser("delete", help="Select a record and delete it")
    p_del.add_argument("--id", required=True, help="Record id")
    p_del.set_defaults(func=cmd_delete)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
