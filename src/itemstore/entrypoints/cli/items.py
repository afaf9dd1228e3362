"""``itemstore items``: read-only inspection of the item tree.

Every command builds a provider from the ``ITEMSTORE_*`` environment, which
also prepares the store (indexes, root item) if that has not happened yet.
Output goes to stdout, one record per line.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from sqlalchemy.exc import NoSuchTableError, OperationalError

from itemstore import config
from itemstore.bootstrap import build_provider
from itemstore.domain.ids import ROOT_ID, parse_id
from itemstore.domain.model import VersionUri

from .db import MISSING_DB_URL_MSG
from .helpers import success

if TYPE_CHECKING:
    from uuid import UUID

    from itemstore.domain.model import ItemDefinition
    from itemstore.service_layer import ItemDataProvider

logger = logging.getLogger(__name__)

MISSING_JOIN_PARENT_MSG = (
    "ITEMSTORE_JOIN_PARENT_ID is not set.\n\n"
    "Set it to the id of the repository item that top-level items belong "
    "under, e.g.:\n"
    "  export ITEMSTORE_JOIN_PARENT_ID='b7d2a4e0-3c1f-4e8a-9f6b-2d5c8e1a7f30'"
)

STORE_UNAVAILABLE_MSG = (
    "The item store could not be opened.\n"
    "Check that the database is reachable and run 'itemstore db upgrade' "
    "to create the schema."
)


class ItemIdType(click.ParamType):
    """Click parameter type for item identifiers (dashed, braced or short form)."""

    name = "item_id"

    def convert(self, value, param, ctx) -> UUID:
        try:
            return parse_id(value)
        except ValueError:
            self.fail(f"{value!r} is not a valid item id", param, ctx)


ITEM_ID = ItemIdType()


def open_provider() -> ItemDataProvider:
    """Build the provider from the environment.

    Raises:
        click.ClickException: If the configuration is incomplete or invalid.
    """
    try:
        settings = config.load_settings()
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(MISSING_DB_URL_MSG) from e
    except config.JoinParentNotSetError as e:
        raise click.ClickException(MISSING_JOIN_PARENT_MSG) from e
    except config.InvalidSettingError as e:
        raise click.ClickException(str(e)) from e
    try:
        return build_provider(settings)
    except (OperationalError, NoSuchTableError) as e:
        logger.debug("Opening the item store failed", exc_info=True)
        raise click.ClickException(STORE_UNAVAILABLE_MSG) from e


def format_definition(definition: ItemDefinition) -> str:
    """Render an item definition as aligned ``key: value`` lines."""
    rows = {
        "ID": definition.id,
        "Name": definition.name,
        "Template": definition.template_id or "-",
        "Branch": definition.branch_id or "-",
        "Parent": definition.parent_id,
    }
    return "\n".join(f"{key:<9}: {value}" for key, value in rows.items())


@click.group(cls=clickx.ExtraGroup)
def items() -> None:
    """Inspect items in the store."""


@items.command()
@click.argument("item_id", type=ITEM_ID, default=str(ROOT_ID))
def show(item_id: UUID) -> None:
    """Show the definition of ITEM_ID (default: the root item)."""
    definition = open_provider().get_item_definition(item_id)
    if definition is None:
        raise click.ClickException(f"Item {item_id} not found.")
    click.echo(format_definition(definition))


@items.command()
@click.argument("item_id", type=ITEM_ID, default=str(ROOT_ID))
def children(item_id: UUID) -> None:
    """List the ids and names of the children of ITEM_ID."""
    provider = open_provider()
    for child_id in provider.get_child_ids(item_id):
        definition = provider.get_item_definition(child_id)
        click.echo(f"{child_id}  {definition.name if definition else ''}")


@items.command()
@click.argument("item_id", type=ITEM_ID)
def versions(item_id: UUID) -> None:
    """List the language/version pairs of ITEM_ID."""
    found = open_provider().get_item_versions(item_id)
    if found is None:
        raise click.ClickException(f"Item {item_id} not found.")
    for version in found:
        click.echo(f"{version.language}\t{version.version}")


@items.command()
@click.argument("item_id", type=ITEM_ID)
@click.option("--language", "-l", help="Language to read; omit for shared values only.")
@click.option(
    "--number",
    "-n",
    "version",
    type=click.IntRange(min=1),
    help="Version to read; omit for unversioned values only.",
)
def fields(item_id: UUID, language: str | None, version: int | None) -> None:
    """Print the field values of ITEM_ID visible in a language/version."""
    values = open_provider().get_item_fields(item_id, VersionUri(language, version))
    if values is None:
        raise click.ClickException(f"Item {item_id} not found.")
    for field_id, value in values.items():
        click.echo(f"{field_id}\t{value}")


@items.command()
def init() -> None:
    """Create the indexes and, in an empty store, the root item."""
    provider = open_provider()
    if provider.root_created:
        success(f"Created root item {ROOT_ID}.")
    else:
        logger.info("Store already initialized")
        success("Item store already initialized.")
