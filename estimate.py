"""
Command-line win-rate estimation for every difficulty preset.
"""

import logging

import click
from tqdm import tqdm

from config import DIFFICULTIES, TRIAL_COUNT
from simulation import estimate_win_rate
from analytics import exact_win_probability


@click.command()
@click.option(
    '--trials', '-n',
    type=int,
    default=TRIAL_COUNT,
    show_default=True,
    help='Games to simulate per difficulty',
)
@click.option(
    '--workers', '-w',
    type=int,
    default=None,
    help='Worker processes (default: CPU count)',
)
@click.option(
    '--seed',
    type=int,
    default=None,
    help='Root seed for reproducible runs',
)
@click.option(
    '--difficulty', '-d',
    type=click.Choice(list(DIFFICULTIES.keys())),
    multiple=True,
    help='Only run these presets (repeatable; default: all)',
)
@click.option(
    '--exact',
    is_flag=True,
    help='Also print the exact win probability',
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Enable logging output',
)
def main(trials, workers, seed, difficulty, exact, verbose):
    """
    Estimate the win rate of the orchard race for each difficulty.
    """
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    if trials <= 0:
        raise click.BadParameter("trials must be a positive integer", param_hint="'--trials'")
    if workers is not None and workers <= 0:
        raise click.BadParameter("workers must be a positive integer", param_hint="'--workers'")

    labels = difficulty or tuple(DIFFICULTIES.keys())
    for label in labels:
        offset = list(DIFFICULTIES).index(label)
        start_pos = DIFFICULTIES[label]
        click.echo(f"Estimating win rate for '{label}' mode (start pos = {start_pos})...")

        with tqdm(total=trials, unit="game", unit_scale=True, leave=False, disable=None) as bar:
            result = estimate_win_rate(
                start_pos,
                trials,
                workers=workers,
                seed=None if seed is None else seed + offset,
                progress=bar.update,
            )

        click.echo(
            f"Won {result.won}, lost {result.lost}, win rate {result.win_rate_percent:.2f}%"
        )
        if exact:
            click.echo(f"Exact win rate {float(exact_win_probability(start_pos)) * 100:.2f}%")


if __name__ == '__main__':
    main()
