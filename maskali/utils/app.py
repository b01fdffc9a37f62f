"""
maskali command-line app

Reads hmmalign output and writes the aligned
sequences restricted to the reference columns
of the profile HMM.
"""

import logging
import sys

import click

from maskali.align.alignment import write_fasta, write_aln
from maskali.align.hmmalign import (
    HmmAlignFile, HmmAlignFormatError,
    SequenceNotFoundError, ColumnOutOfRangeError
)
from maskali.utils.config import (
    load_settings, verify_settings, write_config_file,
    MissingParameterError, InvalidParameterError
)
from maskali.utils.system import ResourceError, valid_file

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# mapping of command line parameters to config file entries
CONFIG_MAP = {
    "retained_char": ("mask", "retained_char"),
    "format": ("output", "format"),
    "width": ("output", "width"),
}

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


def init_logger(level=logging.INFO):
    """
    Set up logging to stderr for command-line usage

    Parameters
    ----------
    level : int, optional (default: logging.INFO)
        Minimum level of messages to be logged
    """
    logging.basicConfig(
        level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr, force=True
    )


def substitute_config(**kwargs):
    """
    Substitute command line arguments into configuration

    Parameters
    ----------
    **kwargs
        Command line parameters to be substituted
        into configuration

    Returns
    -------
    dict
        Updated and validated configuration
    """
    config_file = kwargs.get("config", None)
    if config_file is not None and not valid_file(config_file):
        raise ResourceError(
            "Config file does not exist or is empty: {}".format(
                config_file
            )
        )

    config = load_settings(config_file)

    for param, value in kwargs.items():
        if param in CONFIG_MAP and value is not None:
            outer, inner = CONFIG_MAP[param]
            config[outer][inner] = value

    verify_settings(config)
    return config


def write_projection(sequences, fileobj, config):
    """
    Write projected sequences in configured output format

    Parameters
    ----------
    sequences : list of (str, str)
        Tuples of (sequence ID, projected sequence)
    fileobj : file-like object
        Output file
    config : dict
        Configuration (uses "output" section)
    """
    if config["output"]["format"] == "fasta":
        write_fasta(sequences, fileobj, config["output"]["width"])
    else:
        write_aln(sequences, fileobj)


def run(**kwargs):
    """
    Exposes command line interface as a Python function.

    Parameters
    ----------
    kwargs
        See click.option decorators for app() function

    Returns
    -------
    HmmAlignFile
        Parsed alignment
    """
    config = substitute_config(**kwargs)

    # store effective settings (config file and command line)
    dump_file = kwargs.get("dump_config", None)
    if dump_file is not None:
        write_config_file(dump_file, config)
        logging.info("Wrote configuration to {}".format(dump_file))

    alignment = HmmAlignFile.from_path(
        kwargs["alignment"],
        retained_char=config["mask"]["retained_char"]
    )

    logging.info(
        "{}: {} sequences, {} of {} columns retained".format(
            kwargs["alignment"], len(alignment),
            len(alignment.mask_idx), len(alignment.mask)
        )
    )

    ids = kwargs.get("ids", None) or None

    # check requested sequences before writing any output
    if ids is not None:
        missing = [seq_id for seq_id in ids if seq_id not in alignment]
        if len(missing) > 0:
            raise SequenceNotFoundError(
                "Missing sequence for: {}".format(", ".join(missing))
            )

    # project everything first, so a sequence shorter than the
    # reference columns does not leave a partial output file
    sequences = list(alignment.projected(ids))

    output = kwargs.get("output", None)

    if output is None:
        write_projection(sequences, sys.stdout, config)
    else:
        with open(output, "w") as f:
            write_projection(sequences, f, config)

        logging.info("Wrote projected alignment to {}".format(output))

    return alignment


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument('alignment')
@click.option("-c", "--config", default=None, help="YAML configuration file")
@click.option("-o", "--output", default=None, help="Output file (default: stdout)")
@click.option(
    "-f", "--format", default=None, type=click.Choice(["fasta", "aln"]),
    help="Output format of projected alignment"
)
@click.option("-w", "--width", default=None, type=int, help="Line width of FASTA output")
@click.option(
    "-x", "--retained_char", default=None,
    help="RF annotation character marking retained columns"
)
@click.option(
    "-i", "--ids", multiple=True,
    help="Only output this sequence (can be given multiple times)"
)
@click.option(
    "-D", "--dump_config", default=None,
    help="Write effective configuration (YAML) to this file"
)
@click.option("-v", "--verbose", default=False, is_flag=True, help="Enable debug logging")
def app(**kwargs):
    """
    Project hmmalign output onto the reference columns of the HMM

    ALIGNMENT is a Stockholm file written by hmmalign (may be
    gzip-compressed). Any command line option overrides the
    corresponding setting in the config file.
    """
    init_logger(logging.DEBUG if kwargs["verbose"] else logging.INFO)

    try:
        run(**kwargs)
    except (
        HmmAlignFormatError, SequenceNotFoundError, ColumnOutOfRangeError,
        MissingParameterError, InvalidParameterError, ResourceError
    ) as e:
        # KeyError subclasses quote their message in str()
        message = e.args[0] if e.args else str(e)
        logging.error(message)
        raise click.ClickException(message) from e


if __name__ == '__main__':
    app()
