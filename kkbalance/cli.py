import io
import logging
import sys
from time import time

import click
import pandas

from kkbalance import assign_buckets, KKBalanceError

# Format string for logging.
LOG_FORMAT = "{name}:{levelname} {message}"


def configure_logging(log_level: str):
    logger = logging.getLogger('kkbalance')
    logger.setLevel(getattr(logging, log_level.upper()))
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, style="{"))
    logger.addHandler(handler)
    return handler


def read_items(file, file_name: str) -> pandas.DataFrame:
    if str(file_name).endswith('json'):
        return pandas.read_json(io.StringIO(file.read().decode('utf-8')))
    return pandas.read_csv(file)


def clean_sizes(data, sizes, limit=None, silent_discard=False, id_column=None):
    """
    Drops rows without a size and optionally truncates to the first `limit` rows.
    """
    for column in (sizes, id_column):
        if column is not None and column not in data.columns:
            raise click.ClickException(f'No column named "{column}" in input.')
    oldlen = len(data.index)
    data = data[data[sizes].notna()].reset_index(drop=True)
    if len(data.index) != oldlen and not silent_discard:
        raise click.ClickException('Some rows have invalid or missing size values.')

    if limit:
        data = data.truncate(after=limit - 1)

    return data


@click.command()
@click.argument('file', type=click.File('rb'))
@click.argument('size_column', type=str)
@click.argument('buckets', type=int)
@click.option('-l', '--limit', type=int, default=None,
              help='Take the first {limit} records from the input, rather than the whole file.')
@click.option('-i', '--id-column', type=str, default=None,
              help='Column identifying each row. Included in --brief output.')
@click.option('--print-all/--no-print-all', '--all/--brief', default=False,
              help='Output all columns in input, or with --brief, only output the ID, size, and bucket columns.')
@click.option('-c', '--column-name', type=str, default='bucket',
              help='Name of the column holding the bucket number. Defaults to "bucket".')
@click.option('--drop-missing/--no-drop-missing', default=False,
              help='Silently drop rows with no size instead of failing.')
@click.option('-t', '--timing/--no-timing', default=False, help='Print balancer timing information to stderr')
@click.option('--summary/--no-summary', default=False,
              help='Print the bucket sums and the spread between the largest and smallest bucket to stderr.')
@click.option('-o', '--output', type=click.File('w'), default='-',
              help='Send output to the given file. Defaults to stdout.')
@click.option('-f', '--output-format', type=click.Choice(['csv', 'json'], case_sensitive=False), default='csv',
              help='Specify output format. Pandas JSON or CSV. Defaults to CSV')
@click.option('--log-level', type=click.Choice(['WARNING', 'INFO', 'DEBUG'], case_sensitive=False),
              default='WARNING', help='Logging level for library diagnostics on stderr.')
def cli(file, size_column, buckets, limit, id_column, print_all, column_name, drop_missing,
        timing, summary, output, output_format, log_level):
    """
    Given a CSV, a size column and a number of buckets, distribute the rows to the
    buckets so that the bucket totals are as even as possible.

    Rows are not kept together in order; any row may go to any bucket.

    > kkbalance jobs.csv cost 2 --id-column job
    job,cost,bucket
    a,4,1
    b,4,1
    c,4,2
    d,1,2
    e,2,2
    """
    handler = configure_logging(log_level)
    file_name = getattr(file, 'name', '-')
    try:
        try:
            data = read_items(file, file_name)
        except ValueError as e:
            raise click.ClickException(f'Could not read {file_name}: {e}')

        data = clean_sizes(data, size_column, limit, silent_discard=drop_missing, id_column=id_column)

        start = time()
        try:
            data, candidate = assign_buckets(data, size_column, buckets, column_name)
        except KKBalanceError as e:
            raise click.ClickException(str(e))
        end = time()
        if timing:
            click.echo(f"Executed in {end-start} seconds.", err=True)
        if summary:
            click.echo(f"{candidate} spread: {candidate.spread}", err=True)

        if not print_all:
            data = data[[c for c in (id_column, size_column, column_name) if c is not None]]
        if output_format.lower() == 'csv':
            data.to_csv(output, index=False)
        else:
            data.to_json(output)
    finally:
        logger = logging.getLogger('kkbalance')
        logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)


if __name__ == '__main__':
    cli(sys.argv[1:])
