"""
Learning-file ingestion and prediction emission.

A learning file is plain whitespace-delimited text:

    <entry_count> <input_count> <output_count>
    <inputs...> <outputs...>        (entry_count rows)
    <prediction_count>
    <inputs...>                     (prediction_count rows)

Line breaks carry no meaning; the file is read as one token stream. The
table holds the raw inputs. The leading column of ones for the intercept is
added later, when the regression design is built.

Usage:
    table = LearningTable.from_file("learn.dat")
    table.inputs.shape             # (entry_count, input_count)
    table.prediction_inputs.shape  # (prediction_count, input_count)
"""

from __future__ import annotations

import logging
import re
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyols.core.exceptions import MalformedInputError

if TYPE_CHECKING:
    from pyols.core.matrix import Matrix

logger = logging.getLogger(__name__)

# Read when the learning tool is given no file name
DEFAULT_DATA_FILE = "learn.dat"

# Plain decimal numerals only: no underscores, no non-ASCII digits
_COUNT_TOKEN = re.compile(r"[0-9]+")
_VALUE_TOKEN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class LearningTable:
    """
    Parsed contents of a learning file.

    Construct via from_file / from_text / from_stream.

    Attributes:
        inputs: Training inputs (entry_count x input_count)
        outputs: Training targets (entry_count x output_count)
        prediction_inputs: Inputs to predict (prediction_count x input_count)
        source_path: File the table was read from, if any
    """
    inputs: NDArray[np.float64]
    outputs: NDArray[np.float64]
    prediction_inputs: NDArray[np.float64]
    source_path: str | None = None

    @property
    def n_entries(self) -> int:
        return self.inputs.shape[0]

    @property
    def n_inputs(self) -> int:
        return self.inputs.shape[1]

    @property
    def n_outputs(self) -> int:
        return self.outputs.shape[1]

    @property
    def n_predictions(self) -> int:
        return self.prediction_inputs.shape[0]

    @property
    def metadata(self) -> dict[str, Any]:
        """Table dimensions and origin."""
        return {
            'n_entries': self.n_entries,
            'n_inputs': self.n_inputs,
            'n_outputs': self.n_outputs,
            'n_predictions': self.n_predictions,
            'source_path': self.source_path,
        }

    # === Factory Methods ===

    @classmethod
    def from_file(cls, path: str | Path) -> LearningTable:
        """
        Read a learning file.

        Raises:
            FileNotFoundError: If the file does not exist
            MalformedInputError: If the contents are not UTF-8 text or
                don't match the format
        """
        path = Path(path)
        with path.open(encoding='utf-8') as stream:
            return cls.from_stream(stream, source_path=str(path))

    @classmethod
    def from_stream(cls, stream: TextIO, *, source_path: str | None = None) -> LearningTable:
        """Read a learning table from an open text stream."""
        try:
            text = stream.read()
        except UnicodeDecodeError as e:
            where = source_path or '<stream>'
            raise MalformedInputError(
                f"{where}: byte {e.start}: not valid {e.encoding} text ({e.reason})",
                path=source_path,
            ) from e
        return cls.from_text(text, source_path=source_path)

    @classmethod
    def from_text(cls, text: str, *, source_path: str | None = None) -> LearningTable:
        """
        Parse a learning table from a string.

        Raises:
            MalformedInputError: On a short read, a non-numeric token or a
                count that is not a non-negative integer
        """
        reader = _TokenReader(text.split(), source_path)

        n_entries = reader.read_count('entry count')
        n_inputs = reader.read_count('input count')
        n_outputs = reader.read_count('output count')

        training = reader.read_values(
            n_entries * (n_inputs + n_outputs), 'training rows'
        ).reshape(n_entries, n_inputs + n_outputs)

        n_predictions = reader.read_count('prediction count')
        prediction_inputs = reader.read_values(
            n_predictions * n_inputs, 'prediction rows'
        ).reshape(n_predictions, n_inputs)

        if reader.remaining:
            warnings.warn(
                f"{reader.where()}: ignoring {reader.remaining} trailing token(s) "
                f"after the last prediction row",
                UserWarning,
                stacklevel=2,
            )

        logger.info(
            "Read %d training rows (%d inputs, %d outputs) and %d prediction rows from %s",
            n_entries, n_inputs, n_outputs, n_predictions, source_path or '<text>',
        )

        return cls(
            inputs=np.ascontiguousarray(training[:, :n_inputs]),
            outputs=np.ascontiguousarray(training[:, n_inputs:]),
            prediction_inputs=prediction_inputs,
            source_path=source_path,
        )


def write_matrix(matrix: 'Matrix', file: TextIO) -> None:
    """Write a matrix as a headerless grid, one row per line."""
    matrix.print(file)
    logger.info("Wrote %dx%d grid", matrix.rows, matrix.columns)


class _TokenReader:
    """Sequential reader over a token list that reports positions on failure."""

    def __init__(self, tokens: list[str], path: str | None):
        self._tokens = tokens
        self._path = path
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._tokens) - self._pos

    def where(self) -> str:
        return self._path or '<text>'

    def _fail(self, message: str, position: int) -> MalformedInputError:
        return MalformedInputError(
            f"{self.where()}: token {position}: {message}",
            path=self._path,
            position=position,
        )

    def read_count(self, what: str) -> int:
        if self.remaining < 1:
            raise self._fail(f"unexpected end of input, expected {what}", self._pos)
        token = self._tokens[self._pos]
        if not _COUNT_TOKEN.fullmatch(token):
            raise self._fail(
                f"{what} must be a non-negative integer, got {token!r}", self._pos
            )
        self._pos += 1
        return int(token)

    def read_values(self, count: int, what: str) -> NDArray[np.float64]:
        if self.remaining < count:
            raise self._fail(
                f"unexpected end of input in {what}: expected {count} values, "
                f"found {self.remaining}",
                len(self._tokens),
            )
        start = self._pos
        values = np.empty(count, dtype=np.float64)
        for offset, token in enumerate(self._tokens[start:start + count]):
            values[offset] = self._parse_float(token, start + offset, what)
        self._pos += count
        return values

    def _parse_float(self, token: str, position: int, what: str) -> float:
        try:
            value = float(token)
        except ValueError:
            raise self._fail(f"non-numeric value {token!r} in {what}", position) from None
        if not np.isfinite(value):
            raise self._fail(f"non-finite value {token!r} in {what}", position)
        if not _VALUE_TOKEN.fullmatch(token):
            raise self._fail(f"non-numeric value {token!r} in {what}", position)
        return value
