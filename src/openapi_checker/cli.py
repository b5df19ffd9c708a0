"""CLI entry point for openapi-checker."""

from pathlib import Path

import click

from openapi_checker.checker.comparator import SpecificationComparator
from openapi_checker.config import CompareOptions, load_not_implemented
from openapi_checker.errors import BadSpecificationError
from openapi_checker.parser.base import ApiDocument
from openapi_checker.parser.openapi import parse_openapi


def _read_doc(file_path: Path) -> ApiDocument:
    click.echo(f"Reading {file_path}")
    return parse_openapi(file_path)


@click.group()
def main():
    """OpenAPI Checker — verify that an API implementation covers its documented contract."""
    pass


@main.command()
@click.option("-s", "--serv", "serv_path", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Input spec to be checked.")
@click.option("-d", "--doc", "doc_path", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Doc spec to be checked against.")
@click.option("-w", "--wip", "wip_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="File listing not implemented paths and operations, one per line.")
@click.option("-v", "--verbose", is_flag=True, help="Print every path and operation as it is checked.")
def check(serv_path: Path, doc_path: Path, wip_path: Path | None, verbose: bool):
    """Check the served spec against the documented spec."""
    try:
        serv_spec = _read_doc(serv_path)
        doc_spec = _read_doc(doc_path)
    except BadSpecificationError as e:
        click.echo(str(e), err=True)
        raise SystemExit(1)

    options = CompareOptions(not_implemented=load_not_implemented(wip_path))
    comparator = SpecificationComparator(options, trace=click.echo if verbose else None)
    result = comparator.compare(serv_spec, doc_spec)

    if result.warnings:
        click.echo("Warnings:")
        for warning in result.warnings:
            click.echo(warning)

    if result.errors:
        click.echo("Errors:")
        for error in result.errors:
            click.echo(error)

    raise SystemExit(1 if result.has_errors else 0)
