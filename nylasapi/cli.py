import json
from typing import Annotated, Any

import typer
from pydantic import TypeAdapter
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nylasapi.config import get_config
from nylasapi.descriptor import OperationKind
from nylasapi.exceptions import NylasAPIError
from nylasapi.resources import RESOURCES
from nylasapi.result import Ok

console = Console()
app = typer.Typer(
    name='nylasapi',
    help='Call Nylas API resources from the command line',
    no_args_is_help=True,
)

_json_adapter = TypeAdapter(Any)


def _fail(message: str) -> typer.Exit:
    console.print(f'[red]Error:[/red] {escape(message)}')
    return typer.Exit(1)


def _parse_params(params: list[str] | None) -> dict[str, str]:
    parsed = {}
    for param in params or []:
        key, sep, value = param.partition('=')
        if not sep or not key:
            raise _fail(f"Invalid parameter '{param}', expected KEY=VALUE")
        parsed[key] = value
    return parsed


def _arguments(
    kind: OperationKind,
    id: str | None,
    params: dict[str, str],
    query: str | None,
    body: Any,
) -> list[Any]:
    if kind in (OperationKind.LIST, OperationKind.FIRST):
        return [params]
    if kind is OperationKind.SEARCH:
        if query is None:
            raise _fail('search requires --query')
        return [query]
    if kind in (OperationKind.FIND, OperationKind.DELETE):
        if id is None:
            raise _fail(f'{kind.value} requires --id')
        return [id]
    if body is None:
        raise _fail(f'{kind.value} requires --body')
    if kind is OperationKind.UPDATE:
        if id is None:
            raise _fail('update requires --id')
        return [body, id]
    return [body]


@app.command()
def operations(
    resource: Annotated[
        str | None, typer.Argument(help='Only show operations of this resource')
    ] = None,
) -> None:
    """List the operations generated for each resource.

    Examples:
        nylasapi operations
        nylasapi operations messages
    """
    if resource is not None and resource not in RESOURCES:
        raise _fail(f"Unknown resource '{resource}'")

    table = Table(title='Operations')
    table.add_column('Resource')
    table.add_column('Operation')
    table.add_column('Method')
    table.add_column('URL')

    for path, resource_cls in RESOURCES.items():
        if resource is not None and path != resource:
            continue
        for operation in resource_cls.operations.values():
            table.add_row(
                path,
                operation.name,
                operation.method or '-',
                operation.url_template(resource_cls.descriptor) or '(local)',
            )

    console.print(table)


@app.command()
def call(
    resource: Annotated[str, typer.Argument(help='Resource path, e.g. messages')],
    operation: Annotated[str, typer.Argument(help='Operation, e.g. list or find')],
    id: Annotated[str | None, typer.Option('--id', help='Object id')] = None,
    param: Annotated[
        list[str] | None,
        typer.Option('--param', '-p', help='Query parameter as KEY=VALUE'),
    ] = None,
    query: Annotated[
        str | None, typer.Option('--query', '-q', help='Search text')
    ] = None,
    body: Annotated[
        str | None, typer.Option('--body', '-b', help='Request body as JSON')
    ] = None,
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
) -> None:
    """Call one operation of a resource and print the result as JSON.

    Examples:
        nylasapi call messages list -p limit=5
        nylasapi call messages find --id abc123
        nylasapi call accounts list -c nylas.yaml
    """
    resource_cls = RESOURCES.get(resource)
    if resource_cls is None:
        raise _fail(f"Unknown resource '{resource}'")

    try:
        kind = OperationKind.coerce(operation)
    except NylasAPIError as e:
        raise _fail(str(e))
    if kind not in resource_cls.operations:
        raise _fail(f"'{resource}' does not support {kind.value}")

    try:
        payload = json.loads(body) if body is not None else None
    except ValueError as e:
        raise _fail(f'Invalid JSON body: {e}')

    args = _arguments(kind, id, _parse_params(param), query, payload)

    if kind is OperationKind.BUILD:
        result = resource_cls.operations[kind].call(*args)
    else:
        try:
            conn = get_config(config).connection()
            result = resource_cls.operations[kind].call(conn, *args)
        except NylasAPIError as e:
            raise _fail(str(e))

    if not isinstance(result, Ok):
        raise _fail(str(result.error))

    console.print_json(
        data=_json_adapter.dump_python(
            result.value, mode='json', by_alias=True, exclude_unset=True
        )
    )


@app.command()
def version() -> None:
    """Show the version of nylasapi."""
    from nylasapi import __version__

    console.print(f'nylasapi version: {__version__}')


if __name__ == '__main__':
    app()
