"""
Reader for Stockholm alignments written by hmmalign, and
projection of aligned sequences onto the reference columns
of the profile HMM (#=GC RF annotation).

.. note::

    Only non-wrapped alignments are supported, i.e. every
    sequence and annotation row has to be on a single line.
"""

import logging
import re
from collections import namedtuple, OrderedDict
from enum import Enum
from types import MappingProxyType

import numpy as np

from maskali.align.alignment import sequences_to_matrix
from maskali.utils.system import open_text

STOCKHOLM_HEADER = "# STOCKHOLM"
END_OF_RECORD = "//"

PP_PREFIX = "#=GR "
PP_CONS_PREFIX = "#=GC PP_cons"
RF_PREFIX = "#=GC RF"

# RF annotation character for match-state (retained) columns
RETAINED_CHAR = "x"

HMMER_PREFIX_WARNING = "# WARNING: seq names have been made unique by adding a prefix of"

RE_PP = re.compile(r"^#=GR (\S+)\s+PP\s+(\S+)$")
RE_PP_CONS = re.compile(r"^#=GC PP_cons\s+(\S+)$")
RE_RF = re.compile(r"^#=GC RF\s+(\S+)$")
RE_SEQUENCE = re.compile(r"^(\S+)\s+(\S+)$")


class HmmAlignFormatError(ValueError):
    """
    Base exception for invalid hmmalign output
    """


class MalformedLineError(HmmAlignFormatError):
    """
    Exception for lines that do not have any
    of the recognized shapes
    """


class DuplicateRecordError(HmmAlignFormatError):
    """
    Exception for repeated sequences or annotation rows
    """


class IncompleteInputError(HmmAlignFormatError):
    """
    Exception for alignments lacking a required section
    """


class SequenceNotFoundError(KeyError):
    """
    Exception for queries of sequences not in the alignment
    """


class ColumnOutOfRangeError(IndexError):
    """
    Exception for retained columns beyond the end
    of an aligned sequence
    """


class LineKind(Enum):
    IGNORE = "ignore"
    PP = "pp"
    PP_CONS = "pp_cons"
    RF = "rf"
    SEQUENCE = "sequence"


# Classified input line; seq_id and value are None
# if not captured for the respective kind of line
Line = namedtuple("Line", ["kind", "seq_id", "value"])


def _match(regex, line):
    m = regex.match(line)
    if m is None:
        raise MalformedLineError("Error parsing: {}".format(line))

    return m


def classify_line(line):
    """
    Determine which kind of record a line of
    hmmalign output contains.

    Prefixed annotation rows are checked before
    falling back to sequence rows, since annotation
    rows would otherwise also be picked up as
    sequence rows.

    Parameters
    ----------
    line : str
        Line of input file (trailing line
        terminator will be removed)

    Returns
    -------
    Line
        namedtuple with fields kind (LineKind),
        seq_id and value

    Raises
    ------
    MalformedLineError
        If line (or the part after an annotation
        prefix) has an invalid format, or if
        hmmer made sequence identifiers unique
        by adding prefixes
    """
    line = line.rstrip("\r\n")

    if line.startswith(HMMER_PREFIX_WARNING):
        raise MalformedLineError(
            "HMMER added identifier prefixes to alignment because of "
            "non-unique sequence identifiers: {}".format(line)
        )

    if line == "" or line.startswith(STOCKHOLM_HEADER) or line.startswith(END_OF_RECORD):
        return Line(LineKind.IGNORE, None, None)

    if line.startswith(PP_PREFIX):
        seq_id, value = _match(RE_PP, line).groups()
        return Line(LineKind.PP, seq_id, value)

    if line.startswith(PP_CONS_PREFIX):
        value = _match(RE_PP_CONS, line).group(1)
        return Line(LineKind.PP_CONS, None, value)

    if line.startswith(RF_PREFIX):
        value = _match(RE_RF, line).group(1)
        return Line(LineKind.RF, None, value)

    seq_id, value = _match(RE_SEQUENCE, line).groups()
    return Line(LineKind.SEQUENCE, seq_id, value)


def parse_mask(rf, retained_char=RETAINED_CHAR):
    """
    Turn reference annotation into column mask

    Parameters
    ----------
    rf : str
        #=GC RF annotation string
    retained_char : str, optional (default: "x")
        Character marking retained columns; any
        other character marks an excluded column

    Returns
    -------
    mask : np.array(bool)
        True for each retained column
    mask_idx : np.array(int)
        Indices of retained columns (ascending)
    """
    mask = np.array([c == retained_char for c in rf], dtype=bool)
    mask_idx = np.flatnonzero(mask)

    return mask, mask_idx


def _frozen(array):
    array.flags.writeable = False
    return array


class HmmAlignFile:
    """
    Parsed hmmalign output (sequences, posterior
    probabilities and reference column mask).

    Use factory methods HmmAlignFile.from_lines,
    from_file or from_path to create objects.
    Instances are read-only after construction.
    """
    def __init__(self, seqs, pp, pp_cons, mask, mask_idx):
        """
        Create new object from ready-made, already
        validated components.

        Parameters
        ----------
        seqs : dict-like
            Aligned sequences (key: ID, value: sequence)
        pp : dict-like
            Posterior probability rows (key: ID, value: row)
        pp_cons : str
            Consensus posterior probability row
        mask : np.array(bool)
            True for each retained column
        mask_idx : np.array(int)
            Indices of retained columns
        """
        self._seqs = MappingProxyType(OrderedDict(seqs))
        self._pp = MappingProxyType(OrderedDict(pp))
        self._pp_cons = pp_cons
        self._mask = _frozen(np.array(mask, dtype=bool))
        self._mask_idx = _frozen(np.array(mask_idx, dtype=int))

    @classmethod
    def from_lines(cls, lines, retained_char=RETAINED_CHAR):
        """
        Parse hmmalign output from an iterable of lines.

        Parameters
        ----------
        lines : Iterable of str
            Lines of alignment file
        retained_char : str, optional (default: "x")
            RF character marking retained columns

        Returns
        -------
        HmmAlignFile
            Parsed and validated alignment

        Raises
        ------
        MalformedLineError
        DuplicateRecordError
        IncompleteInputError
        """
        seqs = OrderedDict()
        pp = OrderedDict()
        pp_cons = None
        mask = None
        mask_idx = None

        for line in lines:
            line = line.rstrip("\r\n")
            kind, seq_id, value = classify_line(line)

            if kind is LineKind.IGNORE:
                continue

            elif kind is LineKind.PP:
                if seq_id in pp:
                    raise DuplicateRecordError("Duplicate: {}".format(line))
                pp[seq_id] = value

            elif kind is LineKind.PP_CONS:
                if pp_cons is not None:
                    raise DuplicateRecordError("Duplicate: {}".format(line))
                pp_cons = value

            elif kind is LineKind.RF:
                if mask is not None:
                    raise DuplicateRecordError("Duplicate: {}".format(line))
                mask, mask_idx = parse_mask(value, retained_char)

            else:
                if seq_id in seqs:
                    raise DuplicateRecordError("Duplicate: {}".format(line))
                seqs[seq_id] = value

        # make sure all sections were read
        if len(seqs) == 0:
            raise IncompleteInputError("Invalid alignment: missing sequence rows")

        if len(pp) == 0:
            raise IncompleteInputError("Invalid alignment: missing posterior rows")

        if len(seqs) != len(pp):
            raise IncompleteInputError(
                "Invalid alignment: sequence/posterior count mismatch "
                "({} sequences, {} posterior rows)".format(len(seqs), len(pp))
            )

        if not pp_cons:
            raise IncompleteInputError("Invalid alignment: missing consensus")

        if mask is None or len(mask) == 0 or len(mask_idx) == 0:
            raise IncompleteInputError("Invalid alignment: missing mask")

        logging.debug(
            "Read hmmalign output: {} sequences, {} columns, {} retained".format(
                len(seqs), len(mask), len(mask_idx)
            )
        )

        return cls(seqs, pp, pp_cons, mask, mask_idx)

    @classmethod
    def from_file(cls, fileobj, **kwargs):
        """
        Parse hmmalign output from a text file object

        Parameters
        ----------
        fileobj : file-like object
            hmmalign Stockholm output
        **kwargs
            Passed on to HmmAlignFile.from_lines

        Returns
        -------
        HmmAlignFile
        """
        return cls.from_lines(fileobj, **kwargs)

    @classmethod
    def from_path(cls, path, **kwargs):
        """
        Parse hmmalign output from a plain or
        gzip-compressed file.

        Parameters
        ----------
        path : str or path-like
            Path of alignment file
        **kwargs
            Passed on to HmmAlignFile.from_lines

        Returns
        -------
        HmmAlignFile

        Raises
        ------
        ResourceError
            If file does not exist
        """
        with open_text(path) as f:
            return cls.from_file(f, **kwargs)

    @property
    def seqs(self):
        return self._seqs

    @property
    def pp(self):
        return self._pp

    @property
    def pp_cons(self):
        return self._pp_cons

    @property
    def mask(self):
        return self._mask

    @property
    def mask_idx(self):
        return self._mask_idx

    @property
    def ids(self):
        """
        Sequence identifiers in file order
        """
        return list(self._seqs.keys())

    def __len__(self):
        return len(self._seqs)

    def __contains__(self, seq_id):
        return seq_id in self._seqs

    def _project(self, seq_id, row):
        # retained indices are ascending, so the last one is the largest
        max_idx = self._mask_idx[-1]
        if max_idx >= len(row):
            raise ColumnOutOfRangeError(
                "Retained column {} out of range for {} (length {})".format(
                    max_idx, seq_id, len(row)
                )
            )

        return "".join(np.array(list(row))[self._mask_idx])

    def project(self, seq_id):
        """
        Return the characters of an aligned sequence
        in all retained columns.

        Parameters
        ----------
        seq_id : str
            Identifier of sequence

        Returns
        -------
        str
            Sequence restricted to retained columns

        Raises
        ------
        SequenceNotFoundError
            If there is no sequence with this identifier
        ColumnOutOfRangeError
            If aligned sequence is shorter than the
            largest retained column index
        """
        try:
            seq = self._seqs[seq_id]
        except KeyError:
            raise SequenceNotFoundError(
                "Missing sequence for: {}".format(seq_id)
            ) from None

        return self._project(seq_id, seq)

    def masked_pp(self, seq_id):
        """
        Return posterior probabilities of a sequence
        in all retained columns.

        Parameters
        ----------
        seq_id : str
            Identifier of sequence

        Returns
        -------
        str
            Posterior probability row restricted to
            retained columns

        Raises
        ------
        SequenceNotFoundError
        ColumnOutOfRangeError
        """
        try:
            row = self._pp[seq_id]
        except KeyError:
            raise SequenceNotFoundError(
                "Missing posterior probabilities for: {}".format(seq_id)
            ) from None

        return self._project(seq_id, row)

    def projected(self, ids=None):
        """
        Generator over projected sequences.

        Parameters
        ----------
        ids : list-like, optional (default: None)
            Only project these sequences (in given order).
            If None, project all sequences in file order.

        Returns
        -------
        generator of (str, str) tuples
            Tuples of (sequence ID, projected sequence)
        """
        if ids is None:
            ids = self._seqs.keys()

        for seq_id in ids:
            yield seq_id, self.project(seq_id)

    def to_matrix(self):
        """
        Projected alignment as character matrix

        Returns
        -------
        np.array
            N x L array (N: number of sequences,
            L: number of retained columns)
        """
        return sequences_to_matrix(
            seq for _, seq in self.projected()
        )

    def statistics(self):
        """
        Summary of alignment dimensions

        Returns
        -------
        dict
            num_seqs, num_columns, num_retained and
            pp_cons_retained (consensus posterior
            probabilities of retained columns)
        """
        return {
            "num_seqs": len(self._seqs),
            "num_columns": len(self._mask),
            "num_retained": len(self._mask_idx),
            "pp_cons_retained": self._project("PP_cons", self._pp_cons),
        }
