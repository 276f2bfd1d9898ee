#!/usr/bin/env python3
"""
Personal Book CLI - Main Entry Point

Usage:
    personalbook login --email admin@example.com --password ...   # master
    personalbook login --email ada@example.com --secret-id 482913  # user
    personalbook users register --username Ada --email ada@example.com
    personalbook profile about bio="Mathematician"
    personalbook profile add projects name="Analytical Engine" stack=Brass
    personalbook public <key>
"""

import argparse
import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import httpx
from rich.markup import escape

from personalbook_cli import __version__
from personalbook_cli.api_client import APIError, PersonalBookClient
from personalbook_cli.config import CLIConfig
from personalbook_cli.renderer import Renderer
from personalbook_cli.sections import (
    SECTION_SCHEMAS,
    get_list_schema,
    get_schema,
    make_item,
    parse_assignments,
    remove_item,
    update_about,
    update_item,
)
from personalbook_cli.session import ClientSession, SessionStore


class CLIError(Exception):
    """Usage problem reported to the user without a traceback"""


@dataclass
class CLIContext:
    config: CLIConfig
    store: SessionStore
    renderer: Renderer
    server_url: Optional[str] = None

    def base_url(self, session: Optional[ClientSession] = None) -> str:
        if self.server_url:
            return self.server_url
        if session and session.api_base_url:
            return session.api_base_url
        return self.config.api_base_url

    def client(self, session: Optional[ClientSession] = None) -> PersonalBookClient:
        return PersonalBookClient(
            self.base_url(session),
            token=session.token if session else None,
            timeout=self.config.timeout,
        )


def require_session(session: Optional[ClientSession]) -> ClientSession:
    if session is None:
        raise CLIError("Not logged in. Run: personalbook login --email ... (--password | --secret-id)")
    return session


def target_user_id(session: ClientSession, explicit: Optional[str]) -> str:
    """Profile to act on: --user if given, else the caller's own"""
    if explicit:
        return explicit
    if session.user_id:
        return session.user_id
    raise CLIError("The master has no profile of its own; pass --user SECRET_ID")


async def edit_profile(
    ctx: CLIContext,
    session: ClientSession,
    user_id: str,
    mutate: Callable[[Dict[str, Any]], None],
) -> Dict[str, Any]:
    """Fetch the document, apply `mutate` locally, replace the whole document"""
    async with ctx.client(session) as client:
        document = await client.get_profile(user_id)
        mutate(document)
        return await client.replace_profile(user_id, document)


# ==================== AUTH ====================

async def cmd_login(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    base_url = ctx.base_url()
    async with ctx.client() as client:
        if args.password is not None:
            data = await client.login_master(args.email, args.password)
        else:
            data = await client.login_user(args.email, args.secret_id)

    new_session = ClientSession(
        token=data["token"],
        role=data["role"],
        username=data["username"],
        user_id=data.get("id"),
        api_base_url=base_url,
    )
    ctx.store.save(new_session)
    ctx.renderer.success(f"Logged in as [bold]{escape(new_session.username)}[/bold] ({new_session.role})")
    return 0


async def cmd_logout(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    ctx.store.clear()
    ctx.renderer.success("Logged out")
    return 0


async def cmd_whoami(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    session = require_session(session)
    if args.check:
        async with ctx.client(session) as client:
            await client.me()
    ctx.renderer.session(session)
    return 0


# ==================== USERS ====================

async def cmd_users_list(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    session = require_session(session)
    async with ctx.client(session) as client:
        users = await client.list_users()
    ctx.renderer.users(users)
    return 0


async def cmd_users_register(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    session = require_session(session)
    async with ctx.client(session) as client:
        account = await client.register_user(args.username, args.email)
    ctx.renderer.account(account)
    return 0


async def cmd_users_delete(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    session = require_session(session)
    async with ctx.client(session) as client:
        result = await client.delete_user(args.secret_id)
    ctx.renderer.success(result.get("message", "Deleted"))
    return 0


# ==================== PROFILE ====================

async def cmd_profile_show(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    session = require_session(session)
    user_id = target_user_id(session, args.user)
    async with ctx.client(session) as client:
        profile = await client.get_profile(user_id)

    if args.section:
        schema = get_schema(args.section)
        if schema.singleton:
            ctx.renderer.about(profile.get(schema.name) or {})
        else:
            ctx.renderer.section(schema.name, profile.get(schema.name) or [])
    else:
        ctx.renderer.profile(profile)
    return 0


async def cmd_profile_about(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    session = require_session(session)
    user_id = target_user_id(session, args.user)
    values = parse_assignments(args.values)

    def mutate(document: Dict[str, Any]) -> None:
        document["about"] = update_about(document.get("about") or {}, values)

    profile = await edit_profile(ctx, session, user_id, mutate)
    ctx.renderer.about(profile["about"])
    return 0


async def cmd_profile_add(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    session = require_session(session)
    user_id = target_user_id(session, args.user)
    schema = get_list_schema(args.section)
    values = parse_assignments(args.values)

    def mutate(document: Dict[str, Any]) -> None:
        items = document.get(schema.name) or []
        items.append(make_item(schema.name, items, values))
        document[schema.name] = items

    profile = await edit_profile(ctx, session, user_id, mutate)
    ctx.renderer.section(schema.name, profile[schema.name])
    return 0


async def cmd_profile_edit(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    session = require_session(session)
    user_id = target_user_id(session, args.user)
    schema = get_list_schema(args.section)
    values = parse_assignments(args.values)

    def mutate(document: Dict[str, Any]) -> None:
        update_item(schema.name, document.get(schema.name) or [], args.item_id, values)

    profile = await edit_profile(ctx, session, user_id, mutate)
    ctx.renderer.section(schema.name, profile[schema.name])
    return 0


async def cmd_profile_remove(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    session = require_session(session)
    user_id = target_user_id(session, args.user)
    schema = get_list_schema(args.section)

    def mutate(document: Dict[str, Any]) -> None:
        document[schema.name] = remove_item(schema.name, document.get(schema.name) or [], args.item_id)

    profile = await edit_profile(ctx, session, user_id, mutate)
    ctx.renderer.section(schema.name, profile[schema.name])
    return 0


async def cmd_profile_share(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    session = require_session(session)
    user_id = target_user_id(session, args.user)
    async with ctx.client(session) as client:
        link = await client.get_share_link(user_id)
    ctx.renderer.share_link(link)
    return 0


async def cmd_public(args, ctx: CLIContext, session: Optional[ClientSession]) -> int:
    async with ctx.client() as client:
        public = await client.get_public_profile(args.key)
    ctx.renderer.public_profile(public)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="personalbook",
        description="Personal Book - manage personal profiles from the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Sections: {', '.join(SECTION_SCHEMAS)}

Examples:
  personalbook login --email admin@example.com --password admin123
  personalbook users register --username Ada --email ada@example.com
  personalbook login --email ada@example.com --secret-id 482913
  personalbook profile about bio="Poet of numbers"
  personalbook profile add education level=BSc name="University of London"
  personalbook profile share
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--server-url",
        type=str,
        help="API base URL (default: from config, http://localhost:5000/api)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show tracebacks on errors")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Login command
    login_parser = subparsers.add_parser("login", help="Log in as the master or a user")
    login_parser.add_argument("--email", "-e", required=True, help="Account email")
    credential = login_parser.add_mutually_exclusive_group(required=True)
    credential.add_argument("--password", "-p", help="Master password")
    credential.add_argument("--secret-id", "-s", dest="secret_id", help="User secret id")
    login_parser.set_defaults(handler=cmd_login)

    subparsers.add_parser("logout", help="Forget the saved session").set_defaults(handler=cmd_logout)

    whoami_parser = subparsers.add_parser("whoami", help="Show the logged-in identity")
    whoami_parser.add_argument("--check", action="store_true", help="Verify the token with the server")
    whoami_parser.set_defaults(handler=cmd_whoami)

    # Users (master only)
    users_parser = subparsers.add_parser("users", help="Manage users (master only)")
    users_sub = users_parser.add_subparsers(dest="users_command", required=True)

    users_sub.add_parser("list", help="List registered users").set_defaults(handler=cmd_users_list)

    register_parser = users_sub.add_parser("register", help="Register a new user")
    register_parser.add_argument("--username", "-u", required=True)
    register_parser.add_argument("--email", "-e", required=True)
    register_parser.set_defaults(handler=cmd_users_register)

    delete_parser = users_sub.add_parser("delete", help="Delete a user and their profile")
    delete_parser.add_argument("secret_id", help="Secret id of the user")
    delete_parser.set_defaults(handler=cmd_users_delete)

    # Profile
    profile_parser = subparsers.add_parser("profile", help="View and edit a profile")
    profile_sub = profile_parser.add_subparsers(dest="profile_command", required=True)

    def add_profile_command(name: str, help_text: str, handler) -> argparse.ArgumentParser:
        sub = profile_sub.add_parser(name, help=help_text)
        sub.add_argument("--user", help="Target secret id (master; defaults to your own profile)")
        sub.set_defaults(handler=handler)
        return sub

    show_parser = add_profile_command("show", "Show a profile", cmd_profile_show)
    show_parser.add_argument("--section", help="Show one section only")

    about_parser = add_profile_command("about", "Update the about section", cmd_profile_about)
    about_parser.add_argument("values", nargs="+", metavar="FIELD=VALUE")

    add_parser = add_profile_command("add", "Add an item to a section", cmd_profile_add)
    add_parser.add_argument("section")
    add_parser.add_argument("values", nargs="*", metavar="FIELD=VALUE")

    edit_parser = add_profile_command("edit", "Change fields of an item", cmd_profile_edit)
    edit_parser.add_argument("section")
    edit_parser.add_argument("item_id", type=int)
    edit_parser.add_argument("values", nargs="+", metavar="FIELD=VALUE")

    remove_parser = add_profile_command("remove", "Remove an item from a section", cmd_profile_remove)
    remove_parser.add_argument("section")
    remove_parser.add_argument("item_id", type=int)

    add_profile_command("share", "Show the public link of a profile", cmd_profile_share)

    # Public view
    public_parser = subparsers.add_parser("public", help="Show a profile by its public link key")
    public_parser.add_argument("key")
    public_parser.set_defaults(handler=cmd_public)

    return parser


def main(argv=None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "handler", None):
        parser.print_help()
        return 1

    config = CLIConfig.load_default()
    renderer = Renderer()
    ctx = CLIContext(
        config=config,
        store=SessionStore(Path(config.session_file), renderer.console),
        renderer=renderer,
        server_url=args.server_url,
    )
    session = ctx.store.hydrate()

    try:
        return asyncio.run(args.handler(args, ctx, session))
    except APIError as e:
        renderer.error(e.message)
        if e.code == "INVALID_TOKEN":
            renderer.console.print("[dim]Your session is no longer valid. Please log in again.[/dim]")
        return 1
    except (CLIError, ValueError) as e:
        renderer.error(str(e))
        return 1
    except httpx.ConnectError:
        renderer.error(f"Cannot connect to server at {ctx.base_url(session)}. Is it running?")
        return 1
    except httpx.HTTPError as e:
        if args.verbose or config.verbose:
            renderer.console.print_exception()
        renderer.error(f"Request failed: {e}")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
