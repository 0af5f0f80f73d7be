"""Command line front end: show and edit the server configuration.

Usage:
    python -m boxconfig show [--section Email] [--show-secrets]
    python -m boxconfig set email_port=587 default_user_roles="READ, VOTE"
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any

from boxconfig.client import AsyncStashBoxClient
from boxconfig.config import ClientConfig
from boxconfig.controller import ConfigFormController
from boxconfig.exceptions import BoxConfigError
from boxconfig.form import FormState
from boxconfig.schema import FieldKind, FieldSpec
from boxconfig.store import ConfigStore
from boxconfig.utils.logging import configure_logging, redact

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def parse_bool(text: str) -> bool:
    value = text.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"expected one of {', '.join(_TRUE + _FALSE)}, got {text!r}")


def parse_assignments(pairs: list[str], controller: ConfigFormController) -> dict[str, Any]:
    """Turn NAME=VALUE arguments into form edits.

    Booleans are parsed here since a checkbox has no text form; every other
    value is passed on as typed and converted on submit.
    """
    edits: dict[str, Any] = {}
    for pair in pairs:
        name, sep, raw = pair.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"expected NAME=VALUE, got {pair!r}")
        spec = controller.schema.field(name)
        edits[name] = parse_bool(raw) if spec.kind is FieldKind.BOOLEAN else raw
    return edits


def format_value(spec: FieldSpec, value: Any, show_secrets: bool = False) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    text = str(value)
    if spec.secret and not show_secrets:
        return redact(text)
    return text


def render_form(form: FormState, section: str | None = None, show_secrets: bool = False) -> str:
    lines: list[str] = []
    for name, specs in form.schema.sections().items():
        if section and name.lower() != section.lower():
            continue
        lines.append(f"[{name}]")
        for spec in specs:
            value = format_value(spec, form[spec.name], show_secrets)
            lines.append(f"  {spec.name} = {value}")
        lines.append("")
    return "\n".join(lines).rstrip()


async def _show(controller: ConfigFormController, args: argparse.Namespace) -> int:
    form = await controller.load()
    if args.section and args.section.lower() not in (s.lower() for s in controller.schema.sections()):
        print(f"Unknown section: {args.section}", file=sys.stderr)
        return 2
    print(render_form(form, args.section, args.show_secrets))
    return 0


async def _set(controller: ConfigFormController, args: argparse.Namespace) -> int:
    await controller.load()
    try:
        edits = parse_assignments(args.assignments, controller)
    except (KeyError, ValueError) as e:
        print(f"Error: {e.args[0] if e.args else e}", file=sys.stderr)
        return 2
    for name, value in edits.items():
        controller.edit(name, value)
    result = await controller.submit()
    if result.ok:
        print(result.message)
        return 0
    print(f"Error: {result.message}", file=sys.stderr)
    return 1


_COMMANDS = {"show": _show, "set": _set}


async def _run(args: argparse.Namespace, store: ConfigStore | None = None) -> int:
    client: AsyncStashBoxClient | None = None
    if store is None:
        overrides = {"base_url": args.base_url, "api_key": args.api_key}
        config = ClientConfig(**{k: v for k, v in overrides.items() if v is not None})
        client = AsyncStashBoxClient(config=config)
        store = client
    controller = ConfigFormController(store)
    try:
        return await _COMMANDS[args.command](controller, args)
    except BoxConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        controller.close()
        if client is not None:
            await client.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boxconfig", description="View and edit a stash-box server configuration."
    )
    parser.add_argument("--base-url", help="Server URL (env: STASHBOX_BASE_URL)")
    parser.add_argument("--api-key", help="API key (env: STASHBOX_API_KEY)")
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING or ERROR")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print the current configuration")
    show.add_argument("--section", help="Only print one section")
    show.add_argument("--show-secrets", action="store_true", help="Do not mask secrets")

    set_ = sub.add_parser("set", help="Change fields and save the full configuration")
    set_.add_argument("assignments", nargs="+", metavar="NAME=VALUE")
    return parser


def main(argv: list[str] | None = None, *, store: ConfigStore | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return asyncio.run(_run(args, store))


if __name__ == "__main__":
    sys.exit(main())
