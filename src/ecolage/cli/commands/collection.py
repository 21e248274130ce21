"""Generic collection commands."""

import json
from typing import Any

import click

from ecolage.cli.error_handling import handle_domain_error, warn_offline
from ecolage.domain.collections import ALL_COLLECTIONS
from ecolage.domain.errors import DomainError
from ecolage.store.sync import CollectionSync

collection_name = click.argument("name", type=click.Choice(ALL_COLLECTIONS))


def parse_value(raw: str) -> Any:
    """Read a field value as JSON, falling back to the raw string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def parse_fields(ctx: click.Context, pairs: tuple[str, ...]) -> dict[str, Any]:
    """Turn FIELD=VALUE arguments into a document, exiting on malformed pairs."""
    data = {}
    for pair in pairs:
        field, sep, raw = pair.partition("=")
        field = field.strip()
        if not sep or not field:
            click.echo(f"Error: Expected FIELD=VALUE, got '{pair}'", err=True)
            ctx.exit(1)
        data[field] = parse_value(raw)
    return data


@click.group()
def collection_group():
    """Read and edit store collections."""
    pass


@collection_group.command("list")
@collection_name
@click.option("--live", is_flag=True, help="Read through a live subscription")
@click.pass_context
def list_documents(ctx, name: str, live: bool):
    """List the documents of a collection as JSON lines."""
    sync = CollectionSync(ctx.obj["store"].collection(name), realtime=live)
    try:
        with sync:
            state = sync.state
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if state.offline:
        warn_offline(state.error)
    if not state.data:
        click.echo(f"No documents in '{name}'.")
        return
    for item in state.items():
        click.echo(json.dumps(item, ensure_ascii=False, sort_keys=True))


@collection_group.command("add")
@collection_name
@click.argument("fields", nargs=-1, required=True, metavar="FIELD=VALUE...")
@click.pass_context
def add_document(ctx, name: str, fields: tuple[str, ...]):
    """Add a document to a collection.

    Values are read as JSON when possible, so numbers and booleans keep
    their type.

    Examples:
        ecolage collection add classes name=GSA level=Maternelle
        ecolage collection add employees first_name=Rija last_name=Rakoto salary=800000
    """
    data = parse_fields(ctx, fields)
    sync = CollectionSync(ctx.obj["store"].collection(name))
    try:
        doc_id = sync.create(data)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created document in '{name}' (ID: {doc_id})")


@collection_group.command("update")
@collection_name
@click.argument("doc_id", metavar="ID")
@click.argument("fields", nargs=-1, required=True, metavar="FIELD=VALUE...")
@click.pass_context
def update_document(ctx, name: str, doc_id: str, fields: tuple[str, ...]):
    """Merge fields into an existing document."""
    data = parse_fields(ctx, fields)
    sync = CollectionSync(ctx.obj["store"].collection(name))
    try:
        sync.update(doc_id, data)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated '{name}/{doc_id}'")


@collection_group.command("delete")
@collection_name
@click.argument("doc_id", metavar="ID")
@click.pass_context
def delete_document(ctx, name: str, doc_id: str):
    """Delete a document from a collection."""
    sync = CollectionSync(ctx.obj["store"].collection(name))
    try:
        sync.remove(doc_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted '{name}/{doc_id}'")


def register_commands(cli):
    """Register collection commands with main CLI."""
    cli.add_command(collection_group, name="collection")
