import logging

import click

from csim.address import Geometry
from csim.errors import CsimError
from csim.trace import TraceRunner

EPILOG = '''\b
Examples:
  csim -s 4 -E 1 -b 4 -t traces/yi.trace
  csim -v -s 8 -E 2 -b 4 -t traces/yi.trace'''


def echo_summary(hits, misses, evictions):
    click.echo('hits:{} misses:{} evictions:{}'.format(
        hits, misses, evictions))


@click.command(context_settings={'help_option_names': ['-h', '--help']},
               epilog=EPILOG)
@click.option('-v', '--verbose', is_flag=True, help='Optional verbose flag that displays trace info')
@click.option('-s', '--s', required=True, type=click.IntRange(min=0), help='Number of set index bits (S = 2^s is the number of sets)')
@click.option('-E', '--E', required=True, type=click.IntRange(min=1), help='Associativity (number of lines per set)')
@click.option('-b', '--b', required=True, type=click.IntRange(min=0), help='Number of block bits (B = 2^b is the block size)')
@click.option('-t', '--trace-file', required=True, type=click.Path(exists=True, dir_okay=False), help='Name of the valgrind trace to replay')
@click.option('-w', '--address-bits', type=click.IntRange(min=1), default=None, help='Fixed address width in bits (default: 4 bits per hex digit in the trace)')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False), default='WARNING', show_default=True)
def cli(verbose, s, e, b, trace_file, address_bits, log_level):
    logging.basicConfig(level=log_level.upper(),
                        format='%(levelname)s: %(message)s')
    try:
        geometry = Geometry.create(s, e, b)
        runner = TraceRunner(geometry, verbose=verbose,
                             address_bits=address_bits)
        stats = runner.run_file(trace_file)
    except CsimError as err:
        raise click.ClickException(str(err))
    echo_summary(*stats.as_tuple())


def main():
    cli(auto_envvar_prefix='CSIM')


if __name__ == '__main__':
    main()
