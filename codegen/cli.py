"""CLI entry point for ``codegen`` / ``python -m codegen``.

Usage::

    codegen generate -n my-app -f react --feature typescript --feature eslint
    codegen templates list
    codegen templates create -n my-vue -f vue --feature typescript
    codegen config set default_author "Jane Doe"
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError
from rich.markup import escape

from codegen import __version__
from codegen.config import (
    config_file_path,
    default_config_dir,
    load_config,
    reset_config,
    update_config,
)
from codegen.errors import CodegenError
from codegen.logger import Logger
from codegen.scaffolder import ProjectGenerator, TemplateRegistry
from codegen.scaffolder.frameworks import known_frameworks
from codegen.utils import console, print_error, print_success, print_summary_table


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codegen",
        description="CodeGen -- generate boilerplate projects from templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  codegen generate -n demo-app -f vanilla\n"
            "  codegen generate -n web -f react --feature typescript --feature tailwind\n"
            "  codegen templates list\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Configuration directory (default: ~/.codegen-cli or $CODEGEN_CONFIG_DIR)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", aliases=["g"], help="Generate a new project")
    gen.add_argument("--name", "-n", required=True, help="Project (package) name")
    frameworks = ", ".join(known_frameworks())
    gen.add_argument(
        "--framework", "-f", required=True,
        help=f"One of {frameworks}; any other name gets a README-only skeleton",
    )
    gen.add_argument(
        "--feature", action="append", default=[], dest="features",
        help="Feature to add; repeat for several (applied in the given order)",
    )
    gen.add_argument("--package-manager", "-p", default=None, help="npm, yarn or pnpm")
    gen.add_argument("--template", "-t", default=None, help="Template name to use")
    gen.add_argument("--description", "-d", default="", help="Project description")
    gen.add_argument("--output", "-o", default=None, help="Parent directory for the project")
    gen.add_argument("--timeout", type=float, default=None, help="Give up after N seconds")

    tpl = sub.add_parser("templates", aliases=["t"], help="Manage templates")
    tpl_sub = tpl.add_subparsers(dest="action", required=True)
    tpl_sub.add_parser("list", help="List available templates")
    create = tpl_sub.add_parser("create", help="Create a template")
    create.add_argument("--name", "-n", required=True)
    create.add_argument("--framework", "-f", required=True, help=f"One of {frameworks}")
    create.add_argument("--description", "-d", default="")
    create.add_argument("--author", "-a", default=None)
    create.add_argument("--feature", action="append", default=[], dest="features")
    delete = tpl_sub.add_parser("delete", help="Delete a template")
    delete.add_argument("name")

    cfg = sub.add_parser("config", aliases=["c"], help="Show or change settings")
    cfg_sub = cfg.add_subparsers(dest="action", required=True)
    cfg_sub.add_parser("show", help="Print the current configuration")
    set_cmd = cfg_sub.add_parser("set", help="Change one setting")
    set_cmd.add_argument("key")
    set_cmd.add_argument("value")
    cfg_sub.add_parser("reset", help="Restore default settings")

    return parser


async def _run_generate(args: argparse.Namespace, config_dir: Path) -> None:
    config = load_config(config_dir).with_env_overrides()
    generator = ProjectGenerator(config)
    options = {
        "name": args.name,
        "framework": args.framework,
        "features": args.features,
        "packageManager": args.package_manager,
        "template": args.template,
        "description": args.description,
        "output_dir": args.output,
    }
    if args.timeout:
        result = await generator.generate_with_timeout(options, args.timeout)
    else:
        result = await generator.generate(options)

    details = result.project_details
    print_summary_table(
        {
            "Name": details.name,
            "Framework": details.framework,
            "Features": ", ".join(details.features) or "None",
            "Package manager": details.package_manager.value,
            "Path": result.project_path,
        },
        title="Project created",
    )
    console.print(
        f"Next steps: cd {result.project_path} && "
        f"{details.package_manager.value} install && {details.package_manager.value} run dev"
    )


async def _run_templates(args: argparse.Namespace, config_dir: Path) -> None:
    config = load_config(config_dir).with_env_overrides()
    registry = TemplateRegistry.from_config(config, Logger(config.log_level))

    if args.action == "list":
        await registry.ensure_defaults()
        templates = await registry.list_templates()
        if not templates:
            console.print("[yellow]No templates found.[/yellow]")
            return
        for template in templates:
            print_summary_table(
                {
                    "Framework": template.framework,
                    "Description": template.description or "No description",
                    "Features": ", ".join(template.features) or "None",
                    "Version": template.version,
                    "Author": template.author or "Unknown",
                    "Created": template.created_at,
                    "Files": len(template.files),
                },
                title=template.name,
            )
    elif args.action == "create":
        template = await registry.create(
            {
                "name": args.name,
                "framework": args.framework,
                "description": args.description,
                "features": args.features,
                "author": args.author if args.author is not None else config.default_author,
            }
        )
        print_success(f"Template {template.name!r} created with {len(template.files)} files")
    elif args.action == "delete":
        await registry.delete(args.name)
        print_success(f"Template {args.name!r} deleted")


def _run_config(args: argparse.Namespace, config_dir: Path) -> None:
    if args.action == "show":
        config = load_config(config_dir)
        print_summary_table(
            config.model_dump(),
            title=str(config_file_path(config_dir)),
        )
    elif args.action == "set":
        config = update_config(load_config(config_dir), {args.key: args.value}, config_dir)
        print_success(f"{args.key} = {getattr(config, args.key)}")
    elif args.action == "reset":
        reset_config(config_dir)
        print_success("Configuration reset to defaults")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = _build_parser().parse_args(argv)
    config_dir = args.config_dir or default_config_dir()

    try:
        if args.command in ("generate", "g"):
            asyncio.run(_run_generate(args, config_dir))
        elif args.command in ("templates", "t"):
            asyncio.run(_run_templates(args, config_dir))
        else:
            _run_config(args, config_dir)
    except (CodegenError, OSError, KeyError, PydanticValidationError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
