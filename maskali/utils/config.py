"""
Configuration handling
"""

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedBase
from ruamel.yaml.error import YAMLError

from maskali.utils.helpers import merge_dicts

# output formats for projected alignments
OUTPUT_FORMATS = ("fasta", "aln")

DEFAULT_CONFIG = """
mask:
  # RF annotation character marking a retained column
  retained_char: x

output:
  # format of projected alignment (fasta or aln)
  format: fasta
  # line width for FASTA output
  width: 80
"""


class MissingParameterError(Exception):
    """
    Exception for missing parameters
    """


class InvalidParameterError(Exception):
    """
    Exception for invalid parameter settings
    """


def parse_config(config_str, preserve_order=False):
    """
    Parse a configuration string

    Parameters
    ----------
    config_str : str or file-like object
        Configuration to be parsed
    preserve_order : bool, optional (default: False)
        Preserve formatting of input configuration
        string

    Returns
    -------
    dict
        Configuration dictionary
    """
    yaml = YAML(typ="rt" if preserve_order else "safe", pure=True)

    try:
        return yaml.load(config_str)
    except YAMLError as e:
        raise InvalidParameterError(
            "Could not parse input configuration. "
            "Formatting mistake in config file? "
            "See YAMLError above for details."
        ) from e


def read_config_file(filename, preserve_order=False):
    """
    Read and parse a configuration file.

    Parameters
    ----------
    filename : str
        Path of configuration file

    Returns
    -------
    dict
        Configuration dictionary
    """
    with open(filename) as f:
        return parse_config(f, preserve_order)


def write_config_file(out_filename, config):
    """
    Save configuration data structure in YAML file.

    Parameters
    ----------
    out_filename : str
        Filename of output file
    config : dict
        Config data that will be written to file
    """
    if isinstance(config, CommentedBase):
        yaml = YAML(typ="rt")
    else:
        yaml = YAML(typ="safe", pure=True)

    yaml.default_flow_style = False

    with open(out_filename, "w") as f:
        yaml.dump(config, f)


def check_required(params, keys):
    """
    Verify if required set of parameters is present in configuration

    Parameters
    ----------
    params : dict
        Dictionary with parameters
    keys : list-like
        Set of parameters that has to be present in params

    Raises
    ------
    MissingParameterError
    """
    missing = [k for k in keys if k not in params]

    if len(missing) > 0:
        raise MissingParameterError(
            "Missing required parameters: {} \nGiven: {}".format(
                ", ".join(missing), params
            )
        )


def load_settings(config_file=None):
    """
    Load configuration, filling in defaults for any
    parameter not given in the user configuration.

    Parameters
    ----------
    config_file : str, optional (default: None)
        Path of YAML configuration file. If None,
        default settings are used.

    Returns
    -------
    dict
        Validated configuration dictionary

    Raises
    ------
    MissingParameterError
        If a required section or parameter is missing
    InvalidParameterError
        If a parameter has an invalid value
    """
    config = parse_config(DEFAULT_CONFIG)

    if config_file is not None:
        user_config = read_config_file(config_file)

        # empty config file parses to None
        if user_config is not None:
            if not isinstance(user_config, dict):
                raise InvalidParameterError(
                    "Configuration must be a mapping: {}".format(config_file)
                )

            config = merge_dicts(config, user_config)

    verify_settings(config)
    return config


def verify_settings(config):
    """
    Check a configuration for completeness and valid values

    Parameters
    ----------
    config : dict
        Configuration dictionary

    Raises
    ------
    MissingParameterError
    InvalidParameterError
    """
    check_required(config, ["mask", "output"])

    # e.g. "mask:" without any value parses to None
    for section in ["mask", "output"]:
        if not isinstance(config[section], dict):
            raise InvalidParameterError(
                "Configuration section {} must be a mapping: {}".format(
                    section, config[section]
                )
            )

    check_required(config["mask"], ["retained_char"])
    check_required(config["output"], ["format", "width"])

    retained_char = config["mask"]["retained_char"]
    if not isinstance(retained_char, str) or len(retained_char) != 1:
        raise InvalidParameterError(
            "mask.retained_char must be a single character: {}".format(
                retained_char
            )
        )

    fmt = config["output"]["format"]
    if fmt not in OUTPUT_FORMATS:
        raise InvalidParameterError(
            "Invalid output format: {} (choose from {})".format(
                fmt, ", ".join(OUTPUT_FORMATS)
            )
        )

    width = config["output"]["width"]
    # bool is a subclass of int, so exclude explicitly
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise InvalidParameterError(
            "output.width must be a positive integer: {}".format(width)
        )
